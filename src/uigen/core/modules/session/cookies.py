"""Cookie capabilities used by the session service.

Reads go through a CookieSource and writes through a CookieJar. The web layer
binds a per-request ResponseCookieJar as the ambient jar, so service code that
does not receive an explicit jar can still reach the current request's cookies.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Protocol

from starlette.responses import Response

SameSite = Literal["lax", "strict", "none"]


class CookieSource(Protocol):
    def get(self, name: str) -> str | None: ...


class CookieJar(CookieSource, Protocol):
    def set(
        self,
        name: str,
        value: str,
        *,
        expires: datetime,
        httponly: bool,
        samesite: SameSite,
        path: str,
        secure: bool,
    ) -> None: ...

    def delete(self, name: str, *, path: str = "/") -> None: ...


class HasCookies(Protocol):
    @property
    def cookies(self) -> Mapping[str, str]: ...


class RequestCookies:
    """Read-only cookie source over an inbound request's cookie mapping."""

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self._cookies = cookies

    def get(self, name: str) -> str | None:
        return self._cookies.get(name)


@dataclass(frozen=True)
class CookieWrite:
    value: str
    expires: datetime
    httponly: bool
    samesite: SameSite
    path: str
    secure: bool


@dataclass(frozen=True)
class CookieDeletion:
    path: str


class ResponseCookieJar:
    """Request-scoped jar: reads incoming cookies, queues writes for the response.

    Later writes to the same name replace earlier ones, and reads see queued
    writes, so a sign-in followed by a session lookup in one request agrees.
    """

    def __init__(self, incoming: Mapping[str, str] | None = None) -> None:
        self._incoming = dict(incoming or {})
        self._pending: dict[str, CookieWrite | CookieDeletion] = {}

    def get(self, name: str) -> str | None:
        if name in self._pending:
            change = self._pending[name]
            return change.value if isinstance(change, CookieWrite) else None
        return self._incoming.get(name)

    def set(
        self,
        name: str,
        value: str,
        *,
        expires: datetime,
        httponly: bool,
        samesite: SameSite,
        path: str,
        secure: bool,
    ) -> None:
        self._pending[name] = CookieWrite(value, expires, httponly, samesite, path, secure)

    def delete(self, name: str, *, path: str = "/") -> None:
        self._pending[name] = CookieDeletion(path)

    @property
    def pending(self) -> Mapping[str, CookieWrite | CookieDeletion]:
        return dict(self._pending)

    def apply(self, response: Response) -> None:
        """Copy queued writes onto an outgoing response as Set-Cookie headers."""
        for name, change in self._pending.items():
            if isinstance(change, CookieDeletion):
                response.delete_cookie(name, path=change.path)
            else:
                response.set_cookie(
                    name,
                    change.value,
                    expires=change.expires,
                    path=change.path,
                    secure=change.secure,
                    httponly=change.httponly,
                    samesite=change.samesite,
                )


_current_jar: ContextVar[CookieJar | None] = ContextVar("current_cookie_jar", default=None)


def current_cookie_jar() -> CookieJar:
    """Return the cookie jar bound to the current request."""
    jar = _current_jar.get()
    if jar is None:
        raise RuntimeError("No cookie jar bound to the current context")
    return jar


@contextmanager
def bind_cookie_jar(jar: CookieJar) -> Iterator[CookieJar]:
    token = _current_jar.set(jar)
    try:
        yield jar
    finally:
        _current_jar.reset(token)
