"""Case-insensitive substring search over stored bookmarks."""

from typing import List, Union

from ..models.bookmark import Bookmark
from ..models.result import Err, Ok, Result
from ..models.search import SearchQuery
from .repository import BookmarkRepository


class SearchBookmarks:
    """Find bookmarks whose title, URL or any tag contains the query.

    Matching is a linear, case-insensitive substring scan. Results keep the
    repository's order; no match is an empty list, not an error.
    """

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(self, query: Union[SearchQuery, str]) -> "Result[List[Bookmark]]":
        if not isinstance(query, SearchQuery):
            validated = SearchQuery.create(query)
            if isinstance(validated, Err):
                return validated
            query = validated.value

        bookmarks = await self.repository.find_all()
        if isinstance(bookmarks, Err):
            return bookmarks

        term = query.value.lower()
        return Ok([b for b in bookmarks.value if self._matches(b, term)])

    def _matches(self, bookmark: Bookmark, term: str) -> bool:
        if term in bookmark.title.value.lower():
            return True
        if term in bookmark.url.value.lower():
            return True
        return any(term in tag.value.lower() for tag in bookmark.tags)
