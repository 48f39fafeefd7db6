"""Bookmark use cases: add, edit, remove, tag, untag and list."""

import logging
from typing import Iterable, Optional

from ..models.bookmark import Bookmark, BookmarkId, BookmarkTag, BookmarkTitle, BookmarkUrl
from ..models.errors import ConflictError, NotFoundError
from ..models.result import Err, Ok, Result, collect, fail
from .repository import BookmarkRepository

logger = logging.getLogger(__name__)


def _validate_details(url: str, title: str, tags: Iterable[str]) -> "Result[list]":
    """Validate title, URL and tags together so every bad field is reported."""
    return collect(
        [
            BookmarkTitle.create(title),
            BookmarkUrl.create(url),
            collect(BookmarkTag.create(tag) for tag in tags),
        ]
    )


async def _load_existing(
    repository: BookmarkRepository, bookmark_id: BookmarkId
) -> "Result[Bookmark]":
    found = await repository.find_by_id(bookmark_id)
    if isinstance(found, Err):
        return found

    if found.value is None:
        return fail(NotFoundError(f"Bookmark not found: {bookmark_id}"))

    return found


class AddBookmark:
    """Create and store a new bookmark.

    ``reject_duplicate_titles`` turns on the rule that no two bookmarks may
    share a title. It is off by default.
    """

    def __init__(self, repository: BookmarkRepository, reject_duplicate_titles: bool = False):
        self.repository = repository
        self.reject_duplicate_titles = reject_duplicate_titles

    async def execute(self, url: str, title: str, tags: Iterable[str] = ()) -> "Result[Bookmark]":
        validated = _validate_details(url, title, tags)
        if isinstance(validated, Err):
            return validated

        title_value, url_value, tag_values = validated.value
        created = Bookmark.create(BookmarkId.generate(), title_value, url_value, tag_values)
        if isinstance(created, Err):
            return created

        bookmark = created.value

        if self.reject_duplicate_titles:
            existing = await self.repository.find_all()
            if isinstance(existing, Err):
                return existing

            if any(other.title == bookmark.title for other in existing.value):
                return fail(ConflictError(f"A bookmark titled '{bookmark.title}' already exists"))

        saved = await self.repository.save(bookmark)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Created bookmark {bookmark.id}: {bookmark.title}")

        return Ok(bookmark)


class EditBookmark:
    """Replace the title, URL and tags of an existing bookmark."""

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(
        self, bookmark_id: str, url: str, title: str, tags: Iterable[str] = ()
    ) -> "Result[Bookmark]":
        validated = collect([BookmarkId.create(bookmark_id), _validate_details(url, title, tags)])
        if isinstance(validated, Err):
            return validated

        id_value, (title_value, url_value, tag_values) = validated.value

        existing = await _load_existing(self.repository, id_value)
        if isinstance(existing, Err):
            return existing

        updated = existing.value.with_details(title_value, url_value, tag_values)

        saved = await self.repository.save(updated)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Updated bookmark {updated.id}")

        return Ok(updated)


class RemoveBookmark:
    """Delete an existing bookmark. Removing an unknown id is a NotFoundError."""

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, bookmark_id: str) -> "Result[None]":
        validated = BookmarkId.create(bookmark_id)
        if isinstance(validated, Err):
            return validated

        existing = await _load_existing(self.repository, validated.value)
        if isinstance(existing, Err):
            return existing

        removed = await self.repository.remove(validated.value)
        if isinstance(removed, Err):
            return removed

        logger.info(f"Removed bookmark {validated.value}")

        return Ok(None)


class TagBookmark:
    """Add one tag to a stored bookmark."""

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, bookmark_id: str, tag: str) -> "Result[Bookmark]":
        validated = collect([BookmarkId.create(bookmark_id), BookmarkTag.create(tag)])
        if isinstance(validated, Err):
            return validated

        id_value, tag_value = validated.value

        existing = await _load_existing(self.repository, id_value)
        if isinstance(existing, Err):
            return existing

        tagged = existing.value.add_tag(tag_value)
        if isinstance(tagged, Err):
            return tagged

        saved = await self.repository.save(tagged.value)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Tagged bookmark {id_value} with {tag_value}")

        return tagged


class UntagBookmark:
    """Remove one tag from a stored bookmark."""

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, bookmark_id: str, tag: str) -> "Result[Bookmark]":
        validated = collect([BookmarkId.create(bookmark_id), BookmarkTag.create(tag)])
        if isinstance(validated, Err):
            return validated

        id_value, tag_value = validated.value

        existing = await _load_existing(self.repository, id_value)
        if isinstance(existing, Err):
            return existing

        untagged = existing.value.remove_tag(tag_value)
        if isinstance(untagged, Err):
            return untagged

        saved = await self.repository.save(untagged.value)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Removed tag {tag_value} from bookmark {id_value}")

        return untagged


class GetBookmark:
    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, bookmark_id: str) -> "Result[Bookmark]":
        validated = BookmarkId.create(bookmark_id)
        if isinstance(validated, Err):
            return validated

        return await _load_existing(self.repository, validated.value)


class ListBookmarks:
    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, tag: Optional[str] = None) -> "Result[list]":
        if tag is None:
            return await self.repository.find_all()

        validated = BookmarkTag.create(tag)
        if isinstance(validated, Err):
            return validated

        return await self.repository.find_by_tag(validated.value)
