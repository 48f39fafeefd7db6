"""Tests for FileBookmarkRepository."""

import json
import tempfile
from pathlib import Path

import pytest

from bkm.core.bookmark_repository import FileBookmarkRepository
from bkm.models.bookmark import Bookmark, BookmarkId, BookmarkTag, BookmarkTitle, BookmarkUrl
from bkm.models.errors import NotFoundError, StorageError, ValidationError
from bkm.models.result import Err, Ok, unwrap


def _bookmark(title: str, url: str = "https://example.com", tags=()) -> Bookmark:
    return unwrap(
        Bookmark.create(
            BookmarkId.generate(),
            unwrap(BookmarkTitle.create(title)),
            unwrap(BookmarkUrl.create(url)),
            [unwrap(BookmarkTag.create(t)) for t in tags],
        )
    )


def _tag(name: str) -> BookmarkTag:
    return unwrap(BookmarkTag.create(name))


class TestFileBookmarkRepository:
    """Test bookmark persistence."""

    @pytest.mark.asyncio
    async def test_empty_when_file_missing(self):
        """Test a missing file reads as no bookmarks."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))

            assert await repo.find_all() == Ok([])
            assert await repo.find_by_id(BookmarkId.generate()) == Ok(None)

    @pytest.mark.asyncio
    async def test_save_and_find(self):
        """Test a saved bookmark can be read back."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            bookmark = _bookmark("Python", tags=["lang"])

            assert await repo.save(bookmark) == Ok(None)

            found = unwrap(await repo.find_by_id(bookmark.id))
            assert found == bookmark
            assert found.title.value == "Python"
            assert found.created_at == bookmark.created_at
            assert found.updated_at == bookmark.updated_at

    @pytest.mark.asyncio
    async def test_save_creates_data_dir(self):
        """Test saving creates a missing data directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            data_dir = Path(temp_dir) / "nested" / "bkm"
            repo = FileBookmarkRepository(data_dir)

            await repo.save(_bookmark("A"))

            assert (data_dir / "bookmarks.json").exists()

    @pytest.mark.asyncio
    async def test_file_format(self):
        """Test the on-disk layout uses camelCase timestamps."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            bookmark = _bookmark("A", tags=["x"])
            await repo.save(bookmark)

            records = json.loads(repo.data_file.read_text(encoding="utf-8"))

            assert len(records) == 1
            assert set(records[0]) == {"id", "title", "url", "tags", "createdAt", "updatedAt"}
            assert records[0]["id"] == bookmark.id.value
            assert records[0]["createdAt"].endswith("Z")

    @pytest.mark.asyncio
    async def test_save_replaces_same_id(self):
        """Test saving an existing id updates in place, keeping order."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            first = _bookmark("First")
            second = _bookmark("Second")
            await repo.save(first)
            await repo.save(second)

            renamed = first.with_details(
                unwrap(BookmarkTitle.create("Renamed")), first.url, first.tags
            )
            await repo.save(renamed)

            titles = [b.title.value for b in unwrap(await repo.find_all())]
            assert titles == ["Renamed", "Second"]

    @pytest.mark.asyncio
    async def test_find_by_tag(self):
        """Test filtering by exact tag."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            await repo.save(_bookmark("A", tags=["python"]))
            await repo.save(_bookmark("B", tags=["rust"]))
            await repo.save(_bookmark("C", tags=["python", "web"]))

            found = unwrap(await repo.find_by_tag(_tag("python")))
            assert [b.title.value for b in found] == ["A", "C"]

            assert unwrap(await repo.find_by_tag(_tag("Python"))) == []

    @pytest.mark.asyncio
    async def test_remove(self):
        """Test removing an existing and a missing bookmark."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            bookmark = _bookmark("A")
            await repo.save(bookmark)

            assert await repo.remove(bookmark.id) == Ok(None)
            assert unwrap(await repo.find_all()) == []

            missing = await repo.remove(bookmark.id)
            assert isinstance(missing, Err)
            assert isinstance(missing.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_corrupt_json(self):
        """Test unreadable JSON is a StorageError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            repo.data_file.write_text("{oops", encoding="utf-8")

            result = await repo.find_all()

            assert isinstance(result, Err)
            assert isinstance(result.error, StorageError)

    @pytest.mark.asyncio
    async def test_record_missing_fields(self):
        """Test a record without required fields is a StorageError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            repo.data_file.write_text('[{"id": "x"}]', encoding="utf-8")

            result = await repo.find_all()

            assert isinstance(result, Err)
            assert isinstance(result.error, StorageError)
            assert "index 0" in str(result.error)

    @pytest.mark.asyncio
    async def test_invalid_domain_record(self):
        """Test a well-formed record with invalid values blocks reads and saves."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = FileBookmarkRepository(Path(temp_dir))
            record = {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "",
                "url": "ftp://example.com",
                "tags": [],
                "createdAt": "2026-01-01T00:00:00.000Z",
                "updatedAt": "2026-01-01T00:00:00.000Z",
            }
            repo.data_file.write_text(json.dumps([record]), encoding="utf-8")

            result = await repo.find_all()
            assert isinstance(result, Err)
            assert isinstance(result.errors[0], StorageError)
            assert any(isinstance(e, ValidationError) for e in result.errors[1:])

            saved = await repo.save(_bookmark("New"))
            assert isinstance(saved, Err)
            assert json.loads(repo.data_file.read_text(encoding="utf-8")) == [record]

    @pytest.mark.asyncio
    async def test_last_write_wins(self):
        """Test two repositories on the same file do not merge changes."""
        with tempfile.TemporaryDirectory() as temp_dir:
            first = FileBookmarkRepository(Path(temp_dir))
            second = FileBookmarkRepository(Path(temp_dir))
            shared = _bookmark("Shared")
            await first.save(shared)

            await first.save(
                shared.with_details(unwrap(BookmarkTitle.create("From first")), shared.url, [])
            )
            await second.save(
                shared.with_details(unwrap(BookmarkTitle.create("From second")), shared.url, [])
            )

            stored = unwrap(await first.find_by_id(shared.id))
            assert stored.title.value == "From second"
