"""Session token models."""

from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

SESSION_COOKIE_NAME = "auth-token"
SESSION_TTL = timedelta(days=7)


class Session(BaseModel):
    """Authenticated identity decoded from a verified auth-token.

    Never stored on the server; rebuilt from the token on each request.
    """

    user_id: UUID = Field(alias="userId")
    email: str
    expires_at: AwareDatetime = Field(alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_claims(self) -> dict[str, str]:
        """Payload claims as they appear inside the signed token."""
        return {
            "userId": str(self.user_id),
            "email": self.email,
            "expiresAt": self.expires_at.isoformat(),
        }


class SessionView(BaseModel):
    """Current session (API representation)."""

    user_id: UUID = Field(..., description="Authenticated user ID")
    email: str = Field(..., description="Authenticated email")
    expires_at: datetime = Field(..., description="Moment the session stops being accepted")

    @classmethod
    def from_domain(cls, session: Session) -> "SessionView":
        return cls(user_id=session.user_id, email=session.email, expires_at=session.expires_at)


class TokenFailure(StrEnum):
    """Why a token was rejected. Internal only, callers just see None."""

    MISSING = "missing"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
