from fastapi import APIRouter

from uigen.core.modules.user.models import UserView
from uigen.web.deps import AppDep, SessionDep
from uigen.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the account behind the current session.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_profile(app: AppDep, session: SessionDep) -> UserView:
    return await app.get_current_user(session)
