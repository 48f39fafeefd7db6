"""Configuration store entries and the fuzzy finder settings built on them."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from .result import Ok, Result
from .value_object import StringValueObject

FUZZY_COMMAND_KEY = "fuzzy.command"
FUZZY_ARGS_KEY = "fuzzy.args"
DEFAULT_FUZZY_COMMAND = "fzf"
DEFAULT_FUZZY_ARGS = ""

_INVALID_KEY_CHARS = re.compile(r"[^a-zA-Z0-9.]")
_COMMAND_METACHARS = re.compile(r"[&|;$`(){}\[\]<>'\"\\]")
_DANGEROUS_ARG_PATTERNS = [
    re.compile(r";"),  # command separator
    re.compile(r"\$\("),  # command substitution
    re.compile(r"&&"),
    re.compile(r"\|\|"),
    re.compile(r"\brm\s"),
    re.compile(r"execute\("),  # fzf execute action
]


class ConfigKey(StringValueObject):
    """Dot-delimited alphanumeric key, e.g. ``fuzzy.command``."""

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ConfigKey cannot be empty")

        if (
            ".." in v
            or v.startswith(".")
            or v.endswith(".")
            or _INVALID_KEY_CHARS.search(v)
        ):
            raise ValueError(f"Invalid ConfigKey format: {v}")

        return v


class FuzzyFinderCommand(StringValueObject):
    """Executable name of the fuzzy finder; shell metacharacters are rejected."""

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("FuzzyFinderCommand cannot be empty")

        if _COMMAND_METACHARS.search(v):
            raise ValueError(f"Invalid FuzzyFinderCommand format: {v}")

        return v


class FuzzyFinderArgs(StringValueObject):
    """Extra fuzzy finder arguments. May be empty."""

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        for pattern in _DANGEROUS_ARG_PATTERNS:
            if pattern.search(v):
                raise ValueError(f"Dangerous FuzzyFinderArgs pattern detected: {v}")

        return v


class FuzzyFinderConfig(BaseModel):
    """Fuzzy finder command paired with its arguments."""

    model_config = ConfigDict(frozen=True)

    command: FuzzyFinderCommand
    args: FuzzyFinderArgs

    @classmethod
    def create(
        cls, command: FuzzyFinderCommand, args: FuzzyFinderArgs
    ) -> "Result[FuzzyFinderConfig]":
        return Ok(cls(command=command, args=args))

    def get_command_line(self) -> str:
        args = self.args.value.strip()
        if not args:
            return self.command.value
        return f"{self.command.value} {args}"

    def equals(self, other: object) -> bool:
        return self == other


class ConfigEntry(BaseModel):
    """One key/value pair of the configuration store."""

    model_config = ConfigDict(frozen=True)

    key: ConfigKey
    value: str
    updated_at: datetime
