"""JSON file repository for bookmarks."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.bookmark import Bookmark, BookmarkId, BookmarkTag
from ..models.dto import BookmarkDto
from ..models.errors import NotFoundError, StorageError
from ..models.result import Err, Ok, Result, collect, fail
from ..models.value_object import describe_errors
from ..utils.json_handler import JSONFileError, ensure_directory, load_records, save_records
from ..utils.mappers import BookmarkMapper

logger = logging.getLogger(__name__)

BOOKMARKS_FILE = "bookmarks.json"


class FileBookmarkRepository:
    """Stores bookmarks as one JSON array in ``<data_dir>/bookmarks.json``.

    Every call reads the whole file and, for mutations, rewrites it. Nothing
    coordinates concurrent processes: if two invocations modify the file at
    the same time, the last write wins.
    """

    def __init__(self, data_dir: Path):
        """Initialize repository.

        Args:
            data_dir: Directory holding the bookmarks file
        """
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / BOOKMARKS_FILE

    async def save(self, bookmark: Bookmark) -> "Result[None]":
        """Insert the bookmark, or replace the stored one with the same id.

        Returns:
            Ok(None), or Err with StorageError if the directory, the existing
            file or one of its records is unusable
        """
        try:
            await asyncio.to_thread(ensure_directory, self.data_dir)
        except JSONFileError as e:
            logger.error(f"Cannot create data directory: {e}")
            return fail(StorageError(str(e)))

        loaded = await self._load_valid_dtos()
        if isinstance(loaded, Err):
            return loaded

        dtos = loaded.value
        new_dto = BookmarkMapper.to_dto(bookmark)

        for index, dto in enumerate(dtos):
            if dto.id == new_dto.id:
                dtos[index] = new_dto
                break
        else:
            dtos.append(new_dto)

        written = await self._write(dtos)
        if isinstance(written, Err):
            return written

        logger.debug(f"Saved bookmark {bookmark.id} to {self.data_file}")
        return Ok(None)

    async def find_by_id(self, bookmark_id: BookmarkId) -> "Result[Optional[Bookmark]]":
        """Look up one bookmark.

        Returns:
            Ok(Bookmark), Ok(None) when no record has this id, or Err
        """
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        for dto in loaded.value:
            if dto.id == bookmark_id.value:
                return self._to_domain(dto)

        return Ok(None)

    async def find_all(self) -> "Result[List[Bookmark]]":
        """Load every bookmark in file order. Fails if any record is invalid."""
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        return collect(self._to_domain(dto) for dto in loaded.value)

    async def find_by_tag(self, tag: BookmarkTag) -> "Result[List[Bookmark]]":
        """Load bookmarks carrying ``tag``, in file order."""
        bookmarks = await self.find_all()
        if isinstance(bookmarks, Err):
            return bookmarks

        return Ok([b for b in bookmarks.value if b.has_tag(tag)])

    async def remove(self, bookmark_id: BookmarkId) -> "Result[None]":
        """Delete a bookmark.

        Returns:
            Ok(None), or Err with NotFoundError when no record has this id
        """
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        remaining = [dto for dto in loaded.value if dto.id != bookmark_id.value]
        if len(remaining) == len(loaded.value):
            return fail(NotFoundError(f"Bookmark not found: {bookmark_id}"))

        written = await self._write(remaining)
        if isinstance(written, Err):
            return written

        logger.debug(f"Removed bookmark {bookmark_id} from {self.data_file}")
        return Ok(None)

    async def _load_dtos(self) -> "Result[List[BookmarkDto]]":
        try:
            records = await asyncio.to_thread(load_records, self.data_file)
        except JSONFileError as e:
            logger.error(f"Failed to load bookmarks: {e}")
            return fail(StorageError(str(e)))

        dtos: List[BookmarkDto] = []
        for index, record in enumerate(records):
            try:
                dtos.append(BookmarkDto.model_validate(record))
            except PydanticValidationError as e:
                message = f"Corrupt bookmark record at index {index}: {describe_errors(e)}"
                logger.warning(message)
                return fail(StorageError(message))

        logger.debug(f"Loaded {len(dtos)} bookmark records from {self.data_file}")
        return Ok(dtos)

    async def _load_valid_dtos(self) -> "Result[List[BookmarkDto]]":
        """Load records and check each maps to a valid Bookmark."""
        loaded = await self._load_dtos()
        if isinstance(loaded, Err):
            return loaded

        checked = collect(self._to_domain(dto) for dto in loaded.value)
        if isinstance(checked, Err):
            return checked

        return loaded

    def _to_domain(self, dto: BookmarkDto) -> "Result[Bookmark]":
        result = BookmarkMapper.to_domain(dto)
        if isinstance(result, Err):
            logger.warning(f"Invalid bookmark record {dto.id}: {'; '.join(result.messages())}")
            return Err([StorageError(f"Invalid bookmark record {dto.id}"), *result.errors])
        return result

    async def _write(self, dtos: List[BookmarkDto]) -> "Result[None]":
        try:
            await asyncio.to_thread(
                save_records, self.data_file, [dto.to_record() for dto in dtos]
            )
        except JSONFileError as e:
            logger.error(f"Failed to save bookmarks: {e}")
            return fail(StorageError(str(e)))

        return Ok(None)
