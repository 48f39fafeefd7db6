"""ISO-8601 timestamp formatting and parsing."""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..models.errors import ValidationError
from ..models.result import Ok, Result, fail

_DATETIME = TypeAdapter(datetime)

# Both a date and a time part are required.
_ISO_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}")


def format_timestamp(value: datetime) -> str:
    """Format as UTC with microseconds and a ``Z`` suffix.

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(text: str, field: Optional[str] = None) -> "Result[datetime]":
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts everything :func:`format_timestamp` produces as well as the
    millisecond ``...000Z`` form and explicit offsets.
    """
    if not isinstance(text, str) or not _ISO_DATETIME_RE.match(text):
        return fail(ValidationError(f"Invalid date: {text}", field=field))

    try:
        parsed = _DATETIME.validate_python(text)
    except PydanticValidationError:
        return fail(ValidationError(f"Invalid date: {text}", field=field))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return Ok(parsed.astimezone(timezone.utc))
