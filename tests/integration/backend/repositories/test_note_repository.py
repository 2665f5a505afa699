"""
Integration Tests for Note Repository.

Runs against a real in-memory SQLite database.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notepad.backend.models.note import Note
from notepad.backend.repositories.category import CategoryRepository
from notepad.backend.repositories.note import NoteChanges, NoteRepository


@pytest.fixture
def repo(db_session: AsyncSession) -> NoteRepository:
    return NoteRepository(db_session)


@pytest.fixture
async def work(db_session: AsyncSession):
    return await CategoryRepository(db_session).create_category("Work Notes")


@pytest.fixture
async def home(db_session: AsyncSession):
    return await CategoryRepository(db_session).create_category("Personal")


class TestCreateNote:
    """Tests for create_note."""

    @pytest.mark.asyncio
    async def test_defaults(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id)

        assert note.content == ""
        assert note.tags == []
        assert note.created_at == note.updated_at

    @pytest.mark.asyncio
    async def test_tags_round_trip(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id, tags=["a", "b"])

        fetched = await repo.get_note(note.id)
        assert fetched.tags == ["a", "b"]

    @pytest.mark.asyncio
    async def test_tags_stored_as_json_text(self, repo, work, db_session):
        note = await repo.create_note(title="T", category_id=work.id, tags=["x", "x"])

        raw = await db_session.scalar(select(Note.tags).where(Note.id == note.id))
        assert raw == '["x", "x"]'

    @pytest.mark.asyncio
    async def test_empty_title_allowed(self, repo, work):
        note = await repo.create_note(title="", category_id=work.id)

        assert note.title == ""

    @pytest.mark.asyncio
    async def test_unknown_category_rejected_by_foreign_key(self, repo, work):
        with pytest.raises(IntegrityError):
            await repo.create_note(title="T", category_id="missing")


class TestGetAndDeleteNote:
    """Tests for get_note and delete_note."""

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repo):
        assert await repo.get_note("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id)

        assert await repo.delete_note(note.id) is True
        assert await repo.get_note(note.id) is None
        assert await repo.delete_note(note.id) is False


class TestUpdateNote:
    """Tests for partial note updates."""

    @pytest.mark.asyncio
    async def test_title_only_leaves_other_fields(self, repo, work):
        original = await repo.create_note(
            title="Old", content="<p>body</p>", category_id=work.id, tags=["a"],
        )

        updated = await repo.update_note(original.id, NoteChanges(title="X"))

        assert updated.title == "X"
        assert updated.content == original.content
        assert updated.category_id == original.category_id
        assert updated.tags == original.tags
        assert updated.created_at == original.created_at
        assert updated.updated_at > original.updated_at

    @pytest.mark.asyncio
    async def test_updated_at_strictly_increases_on_every_update(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id)
        stamps = [note.updated_at]

        for _ in range(3):
            note = await repo.update_note(note.id, NoteChanges())
            stamps.append(note.updated_at)

        assert stamps == sorted(set(stamps))

    @pytest.mark.asyncio
    async def test_updated_at_follows_clock(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id)
        later = note.updated_at + timedelta(hours=1)

        with patch("notepad.backend.repositories.note.utc_now_seconds", return_value=later):
            updated = await repo.update_note(note.id, NoteChanges(content="c"))

        assert updated.updated_at == later

    @pytest.mark.asyncio
    async def test_burst_drift_is_bounded_and_catches_up(self, repo, work):
        note = await repo.create_note(title="T", category_id=work.id)
        created = note.updated_at
        clock = "notepad.backend.repositories.note.utc_now_seconds"

        with patch(clock, return_value=created):
            for _ in range(3):
                note = await repo.update_note(note.id, NoteChanges(content="typing"))
        assert note.updated_at == created + timedelta(seconds=3)

        with patch(clock, return_value=created + timedelta(seconds=2)):
            note = await repo.update_note(note.id, NoteChanges(content="still typing"))
        assert note.updated_at == created + timedelta(seconds=4)

        with patch(clock, return_value=created + timedelta(seconds=10)):
            note = await repo.update_note(note.id, NoteChanges(content="saved"))
        assert note.updated_at == created + timedelta(seconds=10)

    @pytest.mark.asyncio
    async def test_replaces_tags_and_moves_category(self, repo, work, home):
        note = await repo.create_note(title="T", category_id=work.id, tags=["a"])

        updated = await repo.update_note(note.id, NoteChanges(category_id=home.id, tags=[]))

        assert updated.category_id == home.id
        assert updated.tags == []
        assert (await repo.get_note(note.id)).tags == []

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, repo):
        assert await repo.update_note("missing", NoteChanges(title="X")) is None


class TestListNotes:
    """Tests for filtering, search and ordering."""

    @pytest.mark.asyncio
    async def test_most_recently_updated_first(self, repo, work):
        first = await repo.create_note(title="first", category_id=work.id)
        second = await repo.create_note(title="second", category_id=work.id)
        third = await repo.create_note(title="third", category_id=work.id)

        assert [n.id for n in await repo.list_notes()] == [third.id, second.id, first.id]

        later = third.updated_at + timedelta(minutes=5)
        with patch("notepad.backend.repositories.note.utc_now_seconds", return_value=later):
            await repo.update_note(first.id, NoteChanges(title="first, edited"))

        assert [n.id for n in await repo.list_notes()] == [first.id, third.id, second.id]

    @pytest.mark.asyncio
    async def test_category_filter(self, repo, work, home):
        mine = await repo.create_note(title="w", category_id=work.id)
        await repo.create_note(title="h", category_id=home.id)

        assert [n.id for n in await repo.list_notes(category_id=work.id)] == [mine.id]
        assert await repo.list_notes(category_id="missing") == []

    @pytest.mark.asyncio
    async def test_empty_filters_mean_all(self, repo, work):
        await repo.create_note(title="a", category_id=work.id)

        assert len(await repo.list_notes(category_id="", search="")) == 1

    @pytest.mark.asyncio
    async def test_search_matches_title_content_or_tags(self, repo, work):
        by_title = await repo.create_note(title="FOO report", category_id=work.id)
        by_content = await repo.create_note(title="x", content="<p>about foo</p>", category_id=work.id)
        by_tag = await repo.create_note(title="y", category_id=work.id, tags=["Foolish"])
        await repo.create_note(title="unrelated", category_id=work.id, tags=["bar"])

        found = {n.id for n in await repo.list_notes(search="foo")}

        assert found == {by_title.id, by_content.id, by_tag.id}

    @pytest.mark.asyncio
    async def test_search_within_category(self, repo, work, home):
        match = await repo.create_note(title="foo", category_id=work.id)
        await repo.create_note(title="foo", category_id=home.id)
        await repo.create_note(title="bar", category_id=work.id)

        result = await repo.list_notes(category_id=work.id, search="Foo")

        assert [n.id for n in result] == [match.id]

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, repo, work):
        percent = await repo.create_note(title="100% done", category_id=work.id)
        await repo.create_note(title="100 done", category_id=work.id)

        assert [n.id for n in await repo.list_notes(search="0%")] == [percent.id]
        assert await repo.list_notes(search="_") == []

    @pytest.mark.asyncio
    async def test_search_over_non_ascii_tags(self, repo, work):
        note = await repo.create_note(title="t", category_id=work.id, tags=["café"])

        assert [n.id for n in await repo.list_notes(search="café")] == [note.id]


class TestCategoryNoteCounts:
    """Tests for category_note_counts."""

    @pytest.mark.asyncio
    async def test_counts_per_category(self, repo, work, home):
        for _ in range(3):
            await repo.create_note(title="w", category_id=work.id)
        await repo.create_note(title="h", category_id=home.id)

        counts = await repo.category_note_counts()

        assert counts == {work.id: 3, home.id: 1}
        assert sum(counts.values()) == await repo.count()

    @pytest.mark.asyncio
    async def test_empty(self, repo):
        assert await repo.category_note_counts() == {}
