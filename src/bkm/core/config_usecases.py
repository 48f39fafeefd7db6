"""Use cases for the key/value config store and the fuzzy finder settings."""

import logging
from typing import Dict, Optional

from ..models.errors import ValidationError
from ..models.fuzzy_finder import (
    DEFAULT_FUZZY_ARGS,
    DEFAULT_FUZZY_COMMAND,
    FUZZY_ARGS_KEY,
    FUZZY_COMMAND_KEY,
    ConfigKey,
    FuzzyFinderArgs,
    FuzzyFinderCommand,
    FuzzyFinderConfig,
)
from ..models.result import Err, Ok, Result, collect, fail
from .repository import ConfigRepository

logger = logging.getLogger(__name__)


def _validate_value(value: str) -> "Result[str]":
    if value is None or not value.strip():
        return fail(ValidationError("Config value cannot be empty", field="value"))
    return Ok(value.strip())


class GetConfig:
    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self, key: str) -> "Result[Optional[str]]":
        validated = ConfigKey.create(key)
        if isinstance(validated, Err):
            return validated

        return await self.repository.get(validated.value)


class SetConfig:
    """Store a non-blank value (trimmed) under a key."""

    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self, key: str, value: str) -> "Result[None]":
        validated = collect([ConfigKey.create(key), _validate_value(value)])
        if isinstance(validated, Err):
            return validated

        key_value, clean_value = validated.value

        stored = await self.repository.set(key_value, clean_value)
        if isinstance(stored, Err):
            return stored

        logger.info(f"Set config {key_value}")
        return Ok(None)


class RemoveConfig:
    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self, key: str) -> "Result[None]":
        validated = ConfigKey.create(key)
        if isinstance(validated, Err):
            return validated

        removed = await self.repository.remove(validated.value)
        if isinstance(removed, Err):
            return removed

        logger.info(f"Removed config {validated.value}")
        return Ok(None)


class ListConfig:
    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self) -> "Result[Dict[str, str]]":
        return await self.repository.get_all()


class GetFuzzyFinderConfig:
    """Read the fuzzy finder settings, applying defaults for unset keys.

    Stored values are validated again on every read, so a value that no
    longer satisfies the command/args rules makes the read fail.
    """

    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self) -> "Result[FuzzyFinderConfig]":
        command_value = await self.repository.get(ConfigKey(value=FUZZY_COMMAND_KEY))
        if isinstance(command_value, Err):
            return command_value

        args_value = await self.repository.get(ConfigKey(value=FUZZY_ARGS_KEY))
        if isinstance(args_value, Err):
            return args_value

        validated = collect(
            [
                FuzzyFinderCommand.create(command_value.value or DEFAULT_FUZZY_COMMAND),
                FuzzyFinderArgs.create(args_value.value or DEFAULT_FUZZY_ARGS),
            ]
        )
        if isinstance(validated, Err):
            return validated

        command, args = validated.value
        return FuzzyFinderConfig.create(command, args)


class SetFuzzyFinderConfig:
    """Persist fuzzy finder settings. Writes stop at the first failure."""

    def __init__(self, repository: ConfigRepository):
        self.repository = repository

    async def execute(self, config: FuzzyFinderConfig) -> "Result[None]":
        stored = await self.repository.set(ConfigKey(value=FUZZY_COMMAND_KEY), config.command.value)
        if isinstance(stored, Err):
            return stored

        stored = await self.repository.set(ConfigKey(value=FUZZY_ARGS_KEY), config.args.value)
        if isinstance(stored, Err):
            return stored

        logger.info(f"Fuzzy finder set to: {config.get_command_line()}")
        return Ok(None)

    async def update(
        self, command: Optional[str] = None, args: Optional[str] = None
    ) -> "Result[None]":
        """Validate and store only the settings that were given."""
        checks = []
        if command is not None:
            checks.append(FuzzyFinderCommand.create(command))
        if args is not None:
            checks.append(FuzzyFinderArgs.create(args))

        validated = collect(checks)
        if isinstance(validated, Err):
            return validated

        for value in validated.value:
            key = FUZZY_COMMAND_KEY if isinstance(value, FuzzyFinderCommand) else FUZZY_ARGS_KEY
            stored = await self.repository.set(ConfigKey(value=key), value.value)
            if isinstance(stored, Err):
                return stored

        return Ok(None)
