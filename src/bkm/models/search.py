"""Search query value object."""

from pydantic import field_validator

from .value_object import StringValueObject

QUERY_MAX_LENGTH = 200


class SearchQuery(StringValueObject):
    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("SearchQuery cannot be empty")
        if len(v) > QUERY_MAX_LENGTH:
            raise ValueError(f"SearchQuery cannot exceed {QUERY_MAX_LENGTH} characters")
        return v
