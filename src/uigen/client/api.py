"""HTTP client for the UIGen API, used by the post-sign-in flow."""

from types import TracebackType
from typing import Any, Self
from uuid import UUID

import httpx

from uigen.core.modules.auth.models import AuthResult
from uigen.core.modules.project.models import ChatMessage, FileSystemData, ProjectSummary, ProjectView


class ApiError(Exception):
    """Non-success HTTP response from the API."""

    def __init__(self, status_code: int, message: str, error_type: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_type = error_type

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "message" in body:
            return cls(response.status_code, str(body["message"]), body.get("type"))
        return cls(response.status_code, response.reason_phrase or f"HTTP {response.status_code}")


class ApiClient:
    """Talks to /api/v1; the auth-token cookie set by sign-in stays in the client's jar.

    Wraps an httpx.AsyncClient whose base_url points at the server and owns it
    from then on: closing the ApiClient closes the wrapped client. Use
    `connect` to build one from a URL.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def connect(cls, base_url: str, *, timeout: float = 30.0) -> Self:
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        response = await self._client.request(method, f"/api/v1{path}", json=json)
        if response.is_error:
            raise ApiError.from_response(response)
        return response

    # === Credential actions ===
    async def sign_in(self, email: str, password: str) -> AuthResult:
        response = await self._request("POST", "/auth/sign-in", {"email": email, "password": password})
        return AuthResult.model_validate(response.json())

    async def sign_up(self, email: str, password: str) -> AuthResult:
        response = await self._request("POST", "/auth/sign-up", {"email": email, "password": password})
        return AuthResult.model_validate(response.json())

    async def sign_out(self) -> None:
        await self._request("POST", "/auth/sign-out")

    # === Projects ===
    async def get_projects(self) -> list[ProjectSummary]:
        response = await self._request("GET", "/projects")
        return [ProjectSummary.model_validate(item) for item in response.json()]

    async def create_project(self, name: str, messages: list[ChatMessage], data: FileSystemData) -> ProjectView:
        response = await self._request("POST", "/projects", {"name": name, "messages": messages, "data": data})
        return ProjectView.model_validate(response.json())

    async def get_project(self, project_id: UUID) -> ProjectView:
        response = await self._request("GET", f"/projects/{project_id}")
        return ProjectView.model_validate(response.json())
