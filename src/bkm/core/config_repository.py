"""JSON file repository for the key/value configuration store."""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.dto import ConfigDto
from ..models.errors import NotFoundError, StorageError
from ..models.fuzzy_finder import ConfigEntry, ConfigKey
from ..models.result import Err, Ok, Result, collect, fail
from ..models.value_object import describe_errors
from ..utils.json_handler import JSONFileError, ensure_directory, load_records, save_records
from ..utils.mappers import ConfigMapper

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"


class FileConfigRepository:
    """Stores config entries as one JSON array in ``<data_dir>/config.json``.

    Same whole-file read/rewrite model as the bookmark repository; one entry
    per key is kept by upserting on ``set``.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / CONFIG_FILE

    async def get(self, key: ConfigKey) -> "Result[Optional[str]]":
        """Return the raw stored value, or Ok(None) if the key is unset."""
        found = await self.get_entry(key)
        if isinstance(found, Err):
            return found

        entry = found.value
        return Ok(entry.value if entry is not None else None)

    async def get_entry(self, key: ConfigKey) -> "Result[Optional[ConfigEntry]]":
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        for dto in loaded.value:
            if dto.key == key.value:
                return self._to_domain(dto)

        return Ok(None)

    async def set(self, key: ConfigKey, value: str) -> "Result[None]":
        """Insert or replace the entry for ``key``, stamping it with the current time."""
        try:
            await asyncio.to_thread(ensure_directory, self.data_dir)
        except JSONFileError as e:
            logger.error(f"Cannot create data directory: {e}")
            return fail(StorageError(str(e)))

        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        checked = collect(self._to_domain(dto) for dto in loaded.value)
        if isinstance(checked, Err):
            return checked

        dtos = loaded.value
        new_dto = ConfigMapper.to_dto(
            ConfigEntry(key=key, value=value, updated_at=datetime.now(timezone.utc))
        )

        for index, dto in enumerate(dtos):
            if dto.key == new_dto.key:
                dtos[index] = new_dto
                break
        else:
            dtos.append(new_dto)

        written = await self._write(dtos)
        if isinstance(written, Err):
            return written

        logger.debug(f"Set config {key}")
        return Ok(None)

    async def remove(self, key: ConfigKey) -> "Result[None]":
        """Delete the entry for ``key``; NotFoundError if it is not set."""
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        remaining = [dto for dto in loaded.value if dto.key != key.value]
        if len(remaining) == len(loaded.value):
            return fail(NotFoundError(f"Config not found: {key}"))

        written = await self._write(remaining)
        if isinstance(written, Err):
            return written

        logger.debug(f"Removed config {key}")
        return Ok(None)

    async def get_all(self) -> "Result[Dict[str, str]]":
        """All entries as a key to value mapping, in file order."""
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        entries = collect(self._to_domain(dto) for dto in loaded.value)
        if isinstance(entries, Err):
            return entries

        return Ok({entry.key.value: entry.value for entry in entries.value})

    async def _load_dtos(self) -> "Result[List[ConfigDto]]":
        try:
            records = await asyncio.to_thread(load_records, self.data_file)
        except JSONFileError as e:
            logger.error(f"Failed to load config: {e}")
            return fail(StorageError(str(e)))

        dtos: List[ConfigDto] = []
        for index, record in enumerate(records):
            try:
                dtos.append(ConfigDto.model_validate(record))
            except PydanticValidationError as e:
                message = f"Corrupt config record at index {index}: {describe_errors(e)}"
                logger.warning(message)
                return fail(StorageError(message))

        return Ok(dtos)

    def _to_domain(self, dto: ConfigDto) -> "Result[ConfigEntry]":
        result = ConfigMapper.to_domain(dto)
        if isinstance(result, Err):
            logger.warning(f"Invalid config record {dto.key}: {'; '.join(result.messages())}")
            return Err([StorageError(f"Invalid config record {dto.key}"), *result.errors])
        return result

    async def _write(self, dtos: List[ConfigDto]) -> "Result[None]":
        try:
            await asyncio.to_thread(
                save_records, self.data_file, [dto.to_record() for dto in dtos]
            )
        except JSONFileError as e:
            logger.error(f"Failed to save config: {e}")
            return fail(StorageError(str(e)))

        return Ok(None)
