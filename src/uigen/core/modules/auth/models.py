from typing import Self

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Outcome of a credential action. Failures are values, not exceptions."""

    success: bool = Field(..., description="Whether the credentials were accepted")
    error: str | None = Field(default=None, description="User-facing reason when success is false")

    @classmethod
    def ok(cls) -> Self:
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> Self:
        return cls(success=False, error=error)
