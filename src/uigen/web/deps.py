from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from uigen.app import App
from uigen.core.modules.session.models import SESSION_COOKIE_NAME, Session
from uigen.errors import AuthenticationError

# Declared for OpenAPI; the token itself is read by the session service
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def require_session(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    _token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> Session:
    """Require a valid auth-token cookie on the inbound request."""
    session = app.verify_session(request)
    if session is None:
        raise AuthenticationError
    return session


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionDep = Annotated[Session, Depends(require_session)]
