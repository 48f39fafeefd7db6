"""Repository interfaces used by the use cases."""

from typing import Dict, List, Optional, Protocol

from ..models.bookmark import Bookmark, BookmarkId, BookmarkTag
from ..models.fuzzy_finder import ConfigEntry, ConfigKey
from ..models.result import Result


class BookmarkRepository(Protocol):
    async def save(self, bookmark: Bookmark) -> "Result[None]": ...

    async def find_by_id(self, bookmark_id: BookmarkId) -> "Result[Optional[Bookmark]]": ...

    async def find_all(self) -> "Result[List[Bookmark]]": ...

    async def find_by_tag(self, tag: BookmarkTag) -> "Result[List[Bookmark]]": ...

    async def remove(self, bookmark_id: BookmarkId) -> "Result[None]": ...


class ConfigRepository(Protocol):
    async def get(self, key: ConfigKey) -> "Result[Optional[str]]": ...

    async def get_entry(self, key: ConfigKey) -> "Result[Optional[ConfigEntry]]": ...

    async def set(self, key: ConfigKey, value: str) -> "Result[None]": ...

    async def remove(self, key: ConfigKey) -> "Result[None]": ...

    async def get_all(self) -> "Result[Dict[str, str]]": ...
