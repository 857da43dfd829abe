from uigen.web.routers.auth import router as auth_router
from uigen.web.routers.profile import router as profile_router
from uigen.web.routers.projects import router as projects_router

__all__ = [
    "auth_router",
    "profile_router",
    "projects_router",
]
