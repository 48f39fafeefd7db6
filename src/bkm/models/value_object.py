"""Base class for self-validating string value objects."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .result import Ok, Result, fail


def first_error_message(exc: PydanticValidationError) -> str:
    """Extract the message of the first validator failure.

    Pydantic prefixes ``ValueError`` messages with "Value error, "; the original
    exception is kept in the error context, so prefer its text.
    """
    details = exc.errors()[0]
    original = details.get("ctx", {}).get("error")
    if original is not None:
        return str(original)
    return details["msg"]


def describe_errors(exc: PydanticValidationError) -> str:
    """One-line summary of every field error, e.g. ``title: Field required``."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
        for err in exc.errors()
    )


class StringValueObject(BaseModel):
    """Immutable wrapper around a validated string.

    Subclasses add a ``field_validator("value")`` that normalizes the raw input
    and raises ``ValueError`` with a readable message when a rule is violated.
    Construction always validates, so an invalid instance cannot exist; use
    :meth:`create` to get a ``Result`` instead of an exception.
    """

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def create(cls, raw: Any) -> "Result":
        try:
            return Ok(cls(value=raw))
        except PydanticValidationError as e:
            return fail(ValidationError(first_error_message(e), field=cls.__name__))

    def equals(self, other: object) -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value
