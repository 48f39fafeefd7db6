"""Conversion between stored DTOs and validated domain objects.

``to_domain`` validates every field independently and reports all failures
together, so one bad record yields a complete list of what is wrong with it.
Use cases, in contrast, stop at the first failed step.
"""

from typing import List

from ..models.bookmark import Bookmark, BookmarkId, BookmarkTag, BookmarkTitle, BookmarkUrl
from ..models.dto import BookmarkDto, ConfigDto
from ..models.errors import BkmError, ValidationError
from ..models.fuzzy_finder import ConfigEntry, ConfigKey
from ..models.result import Err, Ok, Result, collect
from .dates import format_timestamp, parse_timestamp


class BookmarkMapper:
    """Maps between BookmarkDto and Bookmark."""

    @staticmethod
    def to_domain(dto: BookmarkDto) -> "Result[Bookmark]":
        """Validate a stored record into a Bookmark.

        Returns:
            Ok(Bookmark), or Err listing every invalid field
        """
        fields = collect(
            [
                BookmarkId.create(dto.id),
                BookmarkTitle.create(dto.title),
                BookmarkUrl.create(dto.url),
                collect(BookmarkTag.create(tag) for tag in dto.tags),
                parse_timestamp(dto.created_at, field="createdAt"),
                parse_timestamp(dto.updated_at, field="updatedAt"),
            ]
        )
        if isinstance(fields, Err):
            return fields

        bookmark_id, title, url, tags, created_at, updated_at = fields.value

        errors: List[BkmError] = []
        seen: List[BookmarkTag] = []
        for tag in tags:
            if tag in seen:
                errors.append(ValidationError(f"Duplicate tag: {tag}", field="tags"))
            seen.append(tag)

        if created_at > updated_at:
            errors.append(
                ValidationError("createdAt must not be later than updatedAt", field="updatedAt")
            )

        if errors:
            return Err(errors)

        return Bookmark.restore(bookmark_id, title, url, tags, created_at, updated_at)

    @staticmethod
    def to_dto(bookmark: Bookmark) -> BookmarkDto:
        return BookmarkDto(
            id=bookmark.id.value,
            title=bookmark.title.value,
            url=bookmark.url.value,
            tags=[tag.value for tag in bookmark.tags],
            created_at=format_timestamp(bookmark.created_at),
            updated_at=format_timestamp(bookmark.updated_at),
        )


class ConfigMapper:
    """Maps between ConfigDto and ConfigEntry."""

    @staticmethod
    def to_domain(dto: ConfigDto) -> "Result[ConfigEntry]":
        fields = collect(
            [
                ConfigKey.create(dto.key),
                parse_timestamp(dto.updated_at, field="updatedAt"),
            ]
        )
        if isinstance(fields, Err):
            return fields

        key, updated_at = fields.value
        return Ok(ConfigEntry(key=key, value=dto.value, updated_at=updated_at))

    @staticmethod
    def to_dto(entry: ConfigEntry) -> ConfigDto:
        return ConfigDto(
            key=entry.key.value,
            value=entry.value,
            updated_at=format_timestamp(entry.updated_at),
        )
