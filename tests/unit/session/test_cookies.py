"""Tests for the request-scoped cookie jar."""

from datetime import UTC, datetime, timedelta

from starlette.responses import Response

from uigen.core.modules.session.cookies import RequestCookies, ResponseCookieJar


def set_cookie(jar: ResponseCookieJar, name: str, value: str, secure: bool = False) -> None:
    jar.set(
        name,
        value,
        expires=datetime.now(UTC) + timedelta(days=1),
        httponly=True,
        samesite="lax",
        path="/",
        secure=secure,
    )


class TestResponseCookieJar:
    """Tests for reads and queued writes."""

    def test_reads_incoming_cookies(self):
        """Test that incoming cookies are visible."""
        jar = ResponseCookieJar({"a": "1"})
        assert jar.get("a") == "1"
        assert jar.get("b") is None

    def test_pending_write_shadows_incoming(self):
        """Test that a queued write is what later reads see."""
        jar = ResponseCookieJar({"a": "1"})
        set_cookie(jar, "a", "2")
        assert jar.get("a") == "2"

    def test_pending_delete_hides_incoming(self):
        """Test that a queued deletion hides the incoming value."""
        jar = ResponseCookieJar({"a": "1"})
        jar.delete("a")
        assert jar.get("a") is None

    def test_last_write_wins(self):
        """Test that the later of two writes is kept."""
        jar = ResponseCookieJar()
        set_cookie(jar, "a", "first")
        set_cookie(jar, "a", "second")
        assert jar.get("a") == "second"
        assert len(jar.pending) == 1

    def test_apply_sets_cookie_header(self):
        """Test that queued writes become Set-Cookie headers with their attributes."""
        jar = ResponseCookieJar()
        set_cookie(jar, "auth-token", "abc", secure=True)
        response = Response()
        jar.apply(response)

        header = response.headers["set-cookie"]
        assert header.startswith("auth-token=abc;")
        assert "HttpOnly" in header
        assert "Path=/" in header
        assert "SameSite=lax" in header
        assert "Secure" in header
        assert "expires=" in header

    def test_apply_deletes_cookie(self):
        """Test that queued deletions expire the cookie."""
        jar = ResponseCookieJar()
        jar.delete("auth-token")
        response = Response()
        jar.apply(response)

        header = response.headers["set-cookie"]
        assert header.startswith("auth-token=")
        assert "Max-Age=0" in header

    def test_apply_without_changes_adds_nothing(self):
        """Test that an untouched jar leaves the response alone."""
        response = Response()
        ResponseCookieJar({"a": "1"}).apply(response)
        assert "set-cookie" not in response.headers


def test_request_cookies_is_read_only_view():
    """Test that RequestCookies only exposes lookups."""
    source = RequestCookies({"auth-token": "abc"})
    assert source.get("auth-token") == "abc"
    assert source.get("missing") is None
    assert not hasattr(source, "set")
