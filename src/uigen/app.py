from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from uigen.config import Config
from uigen.core.core import Core
from uigen.core.modules.auth.models import AuthResult
from uigen.core.modules.project.models import ChatMessage, FileSystemData, ProjectSummary, ProjectView
from uigen.core.modules.session.cookies import HasCookies
from uigen.core.modules.session.models import Session
from uigen.core.modules.user.models import UserView
from uigen.errors import AuthenticationError


class App:
    """Facade for all application operations, resolves the session before delegating to Core."""

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core or Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Credential actions ===
    async def sign_up(self, email: str, password: str) -> AuthResult:
        """Register a new account and start its session."""
        return await self._core.services.auth.sign_up(email, password)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Check credentials and start a session."""
        return await self._core.services.auth.sign_in(email, password)

    async def sign_out(self) -> None:
        """Drop the session cookie of the current request."""
        self._core.services.auth.sign_out()

    def verify_session(self, request: HasCookies) -> Session | None:
        """Session carried by an inbound request, None when absent or invalid."""
        return self._core.services.session.verify_session(request)

    async def get_current_user(self, session: Session) -> UserView:
        """Get the account behind the current session."""
        user = await self._core.services.auth.get_user(session)
        if user is None:
            raise AuthenticationError
        return UserView.from_domain(user)

    # === Projects ===
    async def get_projects(self, session: Session) -> list[ProjectSummary]:
        """List the user's projects, most recently updated first."""
        projects = await self._core.services.project.list_projects_by_user(session.user_id)
        return [ProjectSummary.from_domain(project) for project in projects]

    async def create_project(
        self, session: Session, name: str, messages: list[ChatMessage], data: FileSystemData
    ) -> ProjectView:
        """Create a project owned by the current user."""
        project = await self._core.services.project.create_project(session.user_id, name, messages, data)
        return ProjectView.from_domain(project)

    async def get_project(self, session: Session, project_id: UUID) -> ProjectView:
        """Get a project owned by the current user."""
        project = await self._core.services.project.get_project(project_id, session.user_id)
        return ProjectView.from_domain(project)
