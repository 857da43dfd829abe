"""Signing and verification of auth-token values (HS256 JWT)."""

from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt
import pydantic

from uigen.core.modules.session.models import Session, TokenFailure
from uigen.utils import now

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of verifying a token: either a session or the reason it was rejected."""

    session: Session | None = None
    failure: TokenFailure | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None


def encode_session_token(session: Session, secret: str, issued_at: datetime | None = None) -> str:
    """Sign a session with issued-at and expiration claims."""
    issued_at = issued_at or now()
    claims = {
        **session.to_claims(),
        "iat": int(issued_at.timestamp()),
        "exp": int(session.expires_at.timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM, headers={"alg": ALGORITHM})


def decode_session_token(
    token: str | None, secret: str, leeway: timedelta = timedelta(0), current_time: datetime | None = None
) -> TokenVerification:
    """Verify a token and decode its session. Never raises on bad input."""
    if not token:
        return TokenVerification(failure=TokenFailure.MISSING)

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            leeway=leeway,
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        return TokenVerification(failure=TokenFailure.EXPIRED)
    except jwt.InvalidSignatureError:
        return TokenVerification(failure=TokenFailure.BAD_SIGNATURE)
    except jwt.InvalidTokenError:
        return TokenVerification(failure=TokenFailure.MALFORMED)

    try:
        session = Session.model_validate(claims)
    except pydantic.ValidationError:
        return TokenVerification(failure=TokenFailure.MALFORMED)

    # exp is whole seconds, expiresAt keeps the exact instant
    if (current_time or now()) >= session.expires_at + leeway:
        return TokenVerification(failure=TokenFailure.EXPIRED)

    return TokenVerification(session=session)
