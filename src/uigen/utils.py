import re
from datetime import UTC, datetime

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def local_time_label(moment: datetime | None = None) -> str:
    """Short local time string such as '9:05:12 AM'."""
    moment = moment or datetime.now().astimezone()
    return moment.strftime("%I:%M:%S %p").lstrip("0")
