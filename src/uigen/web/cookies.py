from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from uigen.core.modules.session.cookies import ResponseCookieJar, bind_cookie_jar


async def cookie_jar_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Bind a request-scoped cookie jar and flush its writes onto the response."""
    jar = ResponseCookieJar(request.cookies)
    with bind_cookie_jar(jar):
        response = await call_next(request)
    jar.apply(response)
    return response
