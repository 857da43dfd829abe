"""Tests for signing and verifying session tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import jwt
import pytest

from uigen.core.modules.session.models import Session, TokenFailure
from uigen.core.modules.session.tokens import ALGORITHM, decode_session_token, encode_session_token

SECRET = "unit-test-secret"


def make_session(expires_in: timedelta = timedelta(days=7), user_id: UUID | None = None) -> Session:
    return Session(
        user_id=user_id or uuid4(),
        email="ada@example.com",
        expires_at=datetime.now(UTC) + expires_in,
    )


class TestEncodeSessionToken:
    """Tests for the shape of issued tokens."""

    def test_header_declares_hmac_algorithm(self):
        """Test that the protected header names HS256."""
        token = encode_session_token(make_session(), SECRET)
        assert jwt.get_unverified_header(token)["alg"] == ALGORITHM

    def test_claims_carry_identity_and_times(self):
        """Test that payload, issued-at and expiration claims are present."""
        session = make_session()
        issued_at = datetime.now(UTC)
        token = encode_session_token(session, SECRET, issued_at=issued_at)

        claims = jwt.decode(token, SECRET, algorithms=[ALGORITHM])
        assert claims["userId"] == str(session.user_id)
        assert claims["email"] == "ada@example.com"
        assert claims["expiresAt"] == session.expires_at.isoformat()
        assert claims["iat"] == int(issued_at.timestamp())
        assert claims["exp"] == int(session.expires_at.timestamp())


class TestDecodeSessionToken:
    """Tests for verification outcomes."""

    def test_valid_token_recovers_identity(self):
        """Test that a fresh token decodes to the same user and email."""
        session = make_session()
        result = decode_session_token(encode_session_token(session, SECRET), SECRET)

        assert result.ok
        assert result.failure is None
        assert result.session is not None
        assert result.session.user_id == session.user_id
        assert result.session.email == session.email
        assert result.session.expires_at == session.expires_at

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, token):
        """Test that absent tokens are reported as missing."""
        result = decode_session_token(token, SECRET)
        assert result.session is None
        assert result.failure == TokenFailure.MISSING

    def test_expired_token_rejected(self):
        """Test that a correctly signed token past its expiry is rejected."""
        session = make_session(expires_in=-timedelta(minutes=5))
        token = encode_session_token(session, SECRET, issued_at=datetime.now(UTC) - timedelta(days=7))

        result = decode_session_token(token, SECRET)
        assert result.session is None
        assert result.failure == TokenFailure.EXPIRED

    def test_expires_at_checked_even_if_exp_claim_is_later(self):
        """Test that expiresAt itself bounds validity."""
        session = make_session(expires_in=timedelta(seconds=30))
        token = encode_session_token(session, SECRET)

        later = session.expires_at + timedelta(seconds=1)
        result = decode_session_token(token, SECRET, current_time=later)
        assert result.failure == TokenFailure.EXPIRED

    def test_leeway_accepts_recently_expired_token(self):
        """Test that configured leeway tolerates small clock differences."""
        session = make_session(expires_in=-timedelta(seconds=5))
        token = encode_session_token(session, SECRET, issued_at=datetime.now(UTC) - timedelta(hours=1))

        assert decode_session_token(token, SECRET).failure == TokenFailure.EXPIRED
        assert decode_session_token(token, SECRET, leeway=timedelta(seconds=60)).ok

    def test_foreign_signature_rejected(self):
        """Test that a token signed with another secret is rejected."""
        token = encode_session_token(make_session(), "someone-elses-secret")

        result = decode_session_token(token, SECRET)
        assert result.session is None
        assert result.failure == TokenFailure.BAD_SIGNATURE

    def test_tampered_payload_rejected(self):
        """Test that altering the payload invalidates the signature."""
        token = encode_session_token(make_session(), SECRET)
        header, _, signature = token.split(".")
        forged_payload = encode_session_token(make_session(), "other").split(".")[1]

        result = decode_session_token(f"{header}.{forged_payload}.{signature}", SECRET)
        assert result.failure == TokenFailure.BAD_SIGNATURE

    @pytest.mark.parametrize("token", ["not-a-token", "a.b.c", "....", "eyJhbGciOiJIUzI1NiJ9.e30"])
    def test_garbage_rejected_without_raising(self, token):
        """Test that malformed strings never raise."""
        result = decode_session_token(token, SECRET)
        assert result.session is None
        assert result.failure == TokenFailure.MALFORMED

    def test_unsigned_token_rejected(self):
        """Test that alg=none tokens are not accepted."""
        claims = make_session().to_claims()
        token = jwt.encode(claims, key=None, algorithm="none")

        result = decode_session_token(token, SECRET)
        assert result.session is None

    def test_other_algorithm_rejected(self):
        """Test that a token signed with a different HMAC algorithm is rejected."""
        session = make_session()
        claims = {**session.to_claims(), "iat": int(datetime.now(UTC).timestamp()), "exp": int(session.expires_at.timestamp())}
        token = jwt.encode(claims, SECRET, algorithm="HS512")

        result = decode_session_token(token, SECRET)
        assert result.session is None
        assert result.failure == TokenFailure.MALFORMED

    def test_missing_identity_claims_rejected(self):
        """Test that a signed token without userId is malformed."""
        exp = datetime.now(UTC) + timedelta(days=1)
        token = jwt.encode({"email": "x@example.com", "iat": 0, "exp": int(exp.timestamp())}, SECRET, algorithm=ALGORITHM)

        result = decode_session_token(token, SECRET)
        assert result.failure == TokenFailure.MALFORMED

    def test_non_uuid_user_id_rejected(self):
        """Test that a signed token with an unusable userId is malformed."""
        exp = datetime.now(UTC) + timedelta(days=1)
        claims = {
            "userId": "user-123",
            "email": "x@example.com",
            "expiresAt": exp.isoformat(),
            "iat": int(datetime.now(UTC).timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(claims, SECRET, algorithm=ALGORITHM)

        assert decode_session_token(token, SECRET).failure == TokenFailure.MALFORMED

    def test_naive_expiry_rejected(self):
        """Test that expiresAt without a timezone is malformed."""
        exp = datetime.now(UTC) + timedelta(days=1)
        claims = {
            "userId": str(uuid4()),
            "email": "x@example.com",
            "expiresAt": exp.replace(tzinfo=None).isoformat(),
            "iat": int(datetime.now(UTC).timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(claims, SECRET, algorithm=ALGORITHM)

        assert decode_session_token(token, SECRET).failure == TokenFailure.MALFORMED
