import structlog

from uigen.core.core import Service
from uigen.core.modules.auth.models import AuthResult
from uigen.core.modules.session.cookies import CookieJar
from uigen.core.modules.session.models import Session
from uigen.core.modules.user.models import User
from uigen.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService(Service):
    """Credential actions: check or register credentials, then issue the session cookie.

    Without an explicit cookie jar the session goes to the jar of the current request.
    """

    async def sign_up(self, email: str, password: str, cookies: CookieJar | None = None) -> AuthResult:
        try:
            user = await self.core.services.user.create_user(email, password)
        except ValidationError as e:
            return AuthResult.failed(str(e))

        self.core.services.session.create_session(user.id, user.email, cookies)
        logger.info("user_signed_up", user_id=str(user.id))
        return AuthResult.ok()

    async def sign_in(self, email: str, password: str, cookies: CookieJar | None = None) -> AuthResult:
        if not email or not password:
            return AuthResult.failed("Email and password are required")

        user = await self.core.services.user.verify_credentials(email, password)
        if user is None:
            logger.info("sign_in_rejected")
            return AuthResult.failed(INVALID_CREDENTIALS)

        self.core.services.session.create_session(user.id, user.email, cookies)
        logger.info("user_signed_in", user_id=str(user.id))
        return AuthResult.ok()

    def sign_out(self, cookies: CookieJar | None = None) -> None:
        self.core.services.session.delete_session(cookies)

    async def get_user(self, session: Session) -> User | None:
        """Resolve the account behind a session, None if it was removed."""
        try:
            return await self.core.services.user.get_user(session.user_id)
        except NotFoundError:
            return None
