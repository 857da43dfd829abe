from uigen.errors import ValidationError
from uigen.utils import is_email

MIN_PASSWORD_LENGTH = 8
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def validate_credentials(email: str, password: str) -> None:
    """Validate sign-up input.

    Requirements:
    - Email and password are both present
    - Password has at least 8 characters and at most 72 bytes in UTF-8
    - Email looks like an address

    Raises:
        ValidationError: If input doesn't meet requirements
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if not password_fits_bcrypt(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if not is_email(normalize_email(email)):
        raise ValidationError("Invalid email address")
