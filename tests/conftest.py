"""Shared fixtures: in-memory repositories for use case tests."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from bkm.models.bookmark import Bookmark, BookmarkId, BookmarkTag
from bkm.models.errors import NotFoundError, StorageError
from bkm.models.fuzzy_finder import ConfigEntry, ConfigKey
from bkm.models.result import Ok, Result, fail


class InMemoryBookmarkRepository:
    """BookmarkRepository backed by a list. Set ``broken`` to fail every call."""

    def __init__(self):
        self.bookmarks: List[Bookmark] = []
        self.broken = False
        self.saves = 0

    def _check(self) -> Optional[Result]:
        if self.broken:
            return fail(StorageError("disk on fire"))
        return None

    async def save(self, bookmark: Bookmark) -> "Result[None]":
        error = self._check()
        if error:
            return error
        self.saves += 1
        for index, existing in enumerate(self.bookmarks):
            if existing.id == bookmark.id:
                self.bookmarks[index] = bookmark
                break
        else:
            self.bookmarks.append(bookmark)
        return Ok(None)

    async def find_by_id(self, bookmark_id: BookmarkId) -> "Result[Optional[Bookmark]]":
        error = self._check()
        if error:
            return error
        for bookmark in self.bookmarks:
            if bookmark.id == bookmark_id:
                return Ok(bookmark)
        return Ok(None)

    async def find_all(self) -> "Result[List[Bookmark]]":
        error = self._check()
        if error:
            return error
        return Ok(list(self.bookmarks))

    async def find_by_tag(self, tag: BookmarkTag) -> "Result[List[Bookmark]]":
        error = self._check()
        if error:
            return error
        return Ok([b for b in self.bookmarks if b.has_tag(tag)])

    async def remove(self, bookmark_id: BookmarkId) -> "Result[None]":
        error = self._check()
        if error:
            return error
        remaining = [b for b in self.bookmarks if b.id != bookmark_id]
        if len(remaining) == len(self.bookmarks):
            return fail(NotFoundError(f"Bookmark not found: {bookmark_id}"))
        self.bookmarks = remaining
        return Ok(None)


class InMemoryConfigRepository:
    """ConfigRepository backed by a dict. ``fail_on_set`` makes writes to that key fail."""

    def __init__(self):
        self.entries: Dict[str, ConfigEntry] = {}
        self.fail_on_set: Optional[str] = None

    async def get(self, key: ConfigKey) -> "Result[Optional[str]]":
        entry = self.entries.get(key.value)
        return Ok(entry.value if entry else None)

    async def get_entry(self, key: ConfigKey) -> "Result[Optional[ConfigEntry]]":
        return Ok(self.entries.get(key.value))

    async def set(self, key: ConfigKey, value: str) -> "Result[None]":
        if key.value == self.fail_on_set:
            return fail(StorageError("read-only"))
        self.entries[key.value] = ConfigEntry(
            key=key, value=value, updated_at=datetime.now(timezone.utc)
        )
        return Ok(None)

    async def remove(self, key: ConfigKey) -> "Result[None]":
        if key.value not in self.entries:
            return fail(NotFoundError(f"Config not found: {key}"))
        del self.entries[key.value]
        return Ok(None)

    async def get_all(self) -> "Result[Dict[str, str]]":
        return Ok({k: e.value for k, e in self.entries.items()})


@pytest.fixture
def bookmark_repo():
    return InMemoryBookmarkRepository()


@pytest.fixture
def config_repo():
    return InMemoryConfigRepository()
