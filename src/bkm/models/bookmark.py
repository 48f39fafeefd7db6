"""Bookmark entity and its value objects."""

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, field_validator

from ..utils.url_utils import validate_url
from .errors import ConflictError
from .result import Ok, Result, fail
from .value_object import StringValueObject

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

TITLE_MAX_LENGTH = 500
TAG_MAX_LENGTH = 50


class BookmarkId(StringValueObject):
    """UUID identifying a bookmark."""

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        if not _UUID_RE.fullmatch(v):
            raise ValueError(f"Invalid BookmarkId format: {v}")
        return v

    @classmethod
    def generate(cls) -> "BookmarkId":
        return cls(value=str(uuid4()))


class BookmarkTitle(StringValueObject):
    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("BookmarkTitle cannot be empty")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"BookmarkTitle cannot exceed {TITLE_MAX_LENGTH} characters")
        return v


class BookmarkUrl(StringValueObject):
    """Absolute http or https URL."""

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("BookmarkUrl cannot be empty")
        return validate_url(v)


class BookmarkTag(StringValueObject):
    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("BookmarkTag cannot be empty")
        if len(v) > TAG_MAX_LENGTH:
            raise ValueError(f"BookmarkTag cannot exceed {TAG_MAX_LENGTH} characters")
        return v


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _next_timestamp(previous: datetime) -> datetime:
    """Current time, bumped past ``previous`` when the clock has not advanced."""
    now = _utcnow()
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


def _unique_tags(tags: Iterable[BookmarkTag]) -> Tuple[BookmarkTag, ...]:
    unique: List[BookmarkTag] = []
    for tag in tags:
        if tag not in unique:
            unique.append(tag)
    return tuple(unique)


class Bookmark(BaseModel):
    """A saved URL with a title, tags and lifecycle timestamps.

    Bookmarks are immutable; every mutation returns a new instance whose
    ``updated_at`` is strictly later than the original's. Two bookmarks are
    equal when their ids are equal, regardless of the other fields.
    """

    model_config = ConfigDict(frozen=True)

    id: BookmarkId
    title: BookmarkTitle
    url: BookmarkUrl
    tags: Tuple[BookmarkTag, ...] = ()
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: BookmarkId,
        title: BookmarkTitle,
        url: BookmarkUrl,
        tags: Iterable[BookmarkTag] = (),
    ) -> "Result[Bookmark]":
        """Create a new bookmark stamped with the current time."""
        now = _utcnow()
        return Ok(
            cls(
                id=id,
                title=title,
                url=url,
                tags=_unique_tags(tags),
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def restore(
        cls,
        id: BookmarkId,
        title: BookmarkTitle,
        url: BookmarkUrl,
        tags: Iterable[BookmarkTag],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Result[Bookmark]":
        """Rebuild a bookmark loaded from storage with its original timestamps."""
        return Ok(
            cls(
                id=id,
                title=title,
                url=url,
                tags=tuple(tags),
                created_at=created_at,
                updated_at=updated_at,
            )
        )

    def has_tag(self, tag: BookmarkTag) -> bool:
        return tag in self.tags

    def add_tag(self, tag: BookmarkTag) -> "Result[Bookmark]":
        if self.has_tag(tag):
            return fail(ConflictError(f"Tag already exists: {tag}"))

        return Ok(self._touch(tags=self.tags + (tag,)))

    def remove_tag(self, tag: BookmarkTag) -> "Result[Bookmark]":
        if not self.has_tag(tag):
            return fail(ConflictError(f"Tag does not exist: {tag}"))

        return Ok(self._touch(tags=tuple(t for t in self.tags if t != tag)))

    def with_details(
        self,
        title: BookmarkTitle,
        url: BookmarkUrl,
        tags: Iterable[BookmarkTag],
    ) -> "Bookmark":
        """Copy with replaced title, URL and tags; id and created_at are kept."""
        return self._touch(title=title, url=url, tags=_unique_tags(tags))

    def _touch(self, **changes) -> "Bookmark":
        changes["updated_at"] = _next_timestamp(self.updated_at)
        return self.model_copy(update=changes)

    def equals(self, other: object) -> bool:
        return self == other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bookmark):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
