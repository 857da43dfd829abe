from datetime import timedelta
from uuid import UUID

import structlog

from uigen.core.core import Service
from uigen.core.modules.session.cookies import CookieJar, CookieSource, HasCookies, RequestCookies, current_cookie_jar
from uigen.core.modules.session.models import SESSION_COOKIE_NAME, SESSION_TTL, Session
from uigen.core.modules.session.tokens import TokenVerification, decode_session_token, encode_session_token
from uigen.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies self-contained signed session cookies.

    Nothing is stored server-side: a session lives exactly as long as its
    token verifies. Operations without an explicit cookie jar use the jar
    bound to the current request.
    """

    def create_session(self, user_id: UUID, email: str, cookies: CookieJar | None = None) -> None:
        jar = cookies if cookies is not None else current_cookie_jar()
        session = Session(user_id=user_id, email=email, expires_at=now() + SESSION_TTL)
        token = encode_session_token(session, self.core.config.session_secret_key)
        jar.set(
            SESSION_COOKIE_NAME,
            token,
            expires=session.expires_at,
            httponly=True,
            samesite="lax",
            path="/",
            secure=self.core.config.is_production,
        )
        logger.debug("session_created", user_id=str(user_id), expires_at=session.expires_at.isoformat())

    def get_session(self, cookies: CookieSource | None = None) -> Session | None:
        source = cookies if cookies is not None else current_cookie_jar()
        token = source.get(SESSION_COOKIE_NAME)
        if token is None:
            return None
        return self.read_session(token).session

    def delete_session(self, cookies: CookieJar | None = None) -> None:
        jar = cookies if cookies is not None else current_cookie_jar()
        jar.delete(SESSION_COOKIE_NAME, path="/")

    def verify_session(self, request: HasCookies) -> Session | None:
        """Verify the auth-token carried by an explicit inbound request."""
        return self.get_session(RequestCookies(request.cookies))

    def read_session(self, token: str) -> TokenVerification:
        """Verify a token and keep the rejection reason for diagnostics."""
        result = decode_session_token(
            token,
            self.core.config.session_secret_key,
            leeway=timedelta(seconds=self.core.config.session_leeway_seconds),
        )
        if result.failure is not None:
            logger.debug("session_rejected", reason=result.failure.value)
        return result
