"""Tests for EntryService against an in-memory SQLite database."""

import pytest
import pytest_asyncio

from slatestack.domain.entities import EntryStatus
from slatestack.domain.exceptions import (
    CollectionNotFoundError,
    EntryNotFoundError,
    EntryValidationFailedError,
    MissingSlugSourceError,
    SlugConflictError,
    ValidationFailedError,
)
from slatestack.domain.services import CollectionService, EntryService, EntryValidator
from slatestack.infrastructure.persistence.models import EntryModel


@pytest_asyncio.fixture
async def collection(db_session, blog_fields):
    return await CollectionService(db_session).create_collection("posts", blog_fields)


@pytest.fixture
def service(db_session):
    return EntryService(db_session)


async def positions(service, collection_id):
    entries, _ = await service.list_entries(collection_id)
    return {e.data["title"]: e.position for e in entries}


class TestCreateEntry:

    @pytest.mark.asyncio
    async def test_create_derives_slug_and_defaults(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Hello World", "count": 5})

        assert entry.slug == "hello-world"
        assert entry.status == EntryStatus.DRAFT
        assert entry.position == 0
        assert entry.collection_id == collection.id
        assert entry.data == {"title": "Hello World", "count": 5}
        assert entry.created_at == entry.updated_at
        assert entry.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_duplicate_title_gets_suffix(self, service, collection):
        first = await service.create_entry(collection.id, {"title": "Hello World", "count": 5})
        second = await service.create_entry(collection.id, {"title": "Hello World"})
        third = await service.create_entry(collection.id, {"title": "hello  world!"})

        assert first.slug == "hello-world"
        assert second.slug == "hello-world-2"
        assert third.slug == "hello-world-3"

    @pytest.mark.asyncio
    async def test_long_title_slug_fits_column(self, service, collection):
        title = "a" * 300
        first = await service.create_entry(collection.id, {"title": title})
        second = await service.create_entry(collection.id, {"title": title})

        assert len(first.slug) <= 255
        assert second.slug == f"{first.slug}-2"
        assert len(second.slug) <= 255

    @pytest.mark.asyncio
    async def test_invalid_data_reports_every_error(self, service, collection):
        with pytest.raises(EntryValidationFailedError) as exc_info:
            await service.create_entry(collection.id, {"count": 11})

        details = {d.field: d.code for d in exc_info.value.details}
        assert details == {"title": "required", "count": "max_value"}
        entries, total = await service.list_entries(collection.id)
        assert total == 0

    @pytest.mark.asyncio
    async def test_unknown_collection(self, service):
        with pytest.raises(CollectionNotFoundError):
            await service.create_entry("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_missing_slug_source(self, db_session, service):
        collection = await CollectionService(db_session).create_collection(
            "pages",
            [
                {"name": "heading", "type": "string"},
                {"name": "slug", "type": "slug", "generateFrom": "heading"},
            ],
        )
        with pytest.raises(MissingSlugSourceError) as exc_info:
            await service.create_entry(collection.id, {"heading": ""})
        assert exc_info.value.field_name == "heading"

    @pytest.mark.asyncio
    async def test_slug_falls_back_to_title_field(self, db_session, service):
        collection = await CollectionService(db_session).create_collection(
            "notes", [{"name": "title", "type": "string"}]
        )
        entry = await service.create_entry(collection.id, {"title": "A Note"})
        assert entry.slug == "a-note"

    @pytest.mark.asyncio
    async def test_slug_falls_back_to_random(self, db_session, service):
        collection = await CollectionService(db_session).create_collection(
            "tags", [{"name": "label", "type": "string"}]
        )
        first = await service.create_entry(collection.id, {"label": "x"})
        second = await service.create_entry(collection.id, {"title": "!!!"})

        assert len(first.slug) == 8
        assert len(second.slug) == 8
        assert first.slug != second.slug

    @pytest.mark.asyncio
    async def test_published_status(self, service, collection):
        entry = await service.create_entry(
            collection.id, {"title": "Live"}, status=EntryStatus.PUBLISHED
        )
        assert entry.status == EntryStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_insert_position_end(self, service, collection):
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})
        c = await service.create_entry(collection.id, {"title": "C"})
        assert [a.position, b.position, c.position] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_insert_position_start(self, db_session, collection):
        service = EntryService(db_session, insert_position="start")
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})
        assert [a.position, b.position] == [0, 0]

    @pytest.mark.asyncio
    async def test_strict_options(self, db_session):
        collection = await CollectionService(db_session).create_collection(
            "products",
            [
                {"name": "title", "type": "string"},
                {"name": "color", "type": "select", "options": ["red", "blue"]},
            ],
        )
        lenient = EntryService(db_session)
        strict = EntryService(db_session, validator=EntryValidator(strict_options=True))

        entry = await lenient.create_entry(collection.id, {"title": "Shirt", "color": "green"})
        assert entry.data["color"] == "green"
        with pytest.raises(EntryValidationFailedError) as exc_info:
            await strict.create_entry(collection.id, {"title": "Hat", "color": "green"})
        assert exc_info.value.details[0].code == "invalid_option"

    @pytest.mark.asyncio
    async def test_lost_slug_race_raises_conflict(self, db_session, service, collection):
        await service.create_entry(collection.id, {"title": "Taken"})

        async def stale_check(collection_id, base_slug, exclude_entry_id=None):
            return base_slug

        service.ensure_unique_slug = stale_check
        with pytest.raises(SlugConflictError) as exc_info:
            await service.create_entry(collection.id, {"title": "Taken"})
        assert exc_info.value.slug == "taken"

        _, total = await service.list_entries(collection.id)
        assert total == 1


class TestUpdateEntry:

    @pytest.mark.asyncio
    async def test_update_without_source_change_keeps_slug(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Hello World", "count": 1})

        updated = await service.update_entry(collection.id, entry.id, data={"count": 2})

        assert updated.slug == "hello-world"
        assert updated.data == {"title": "Hello World", "count": 2}
        assert updated.updated_at >= entry.updated_at

    @pytest.mark.asyncio
    async def test_update_same_source_value_keeps_slug(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Hello World"})
        updated = await service.update_entry(
            collection.id, entry.id, data={"title": "Hello World"}
        )
        assert updated.slug == "hello-world"

    @pytest.mark.asyncio
    async def test_update_source_regenerates_slug(self, service, collection):
        await service.create_entry(collection.id, {"title": "Second Post"})
        entry = await service.create_entry(collection.id, {"title": "First Post"})

        updated = await service.update_entry(
            collection.id, entry.id, data={"title": "Second Post"}
        )
        assert updated.slug == "second-post-2"

    @pytest.mark.asyncio
    async def test_update_does_not_collide_with_itself(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Post"})
        updated = await service.update_entry(collection.id, entry.id, data={"title": "POST"})
        assert updated.slug == "post"

    @pytest.mark.asyncio
    async def test_update_validates_merged_data(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Hello", "count": 1})

        with pytest.raises(EntryValidationFailedError) as exc_info:
            await service.update_entry(collection.id, entry.id, data={"count": 99})
        assert [d.field for d in exc_info.value.details] == ["count"]

        stored = await service.get_entry(collection.id, entry.id)
        assert stored.data["count"] == 1

    @pytest.mark.asyncio
    async def test_clearing_slug_source_is_rejected(self, db_session, service):
        collection = await CollectionService(db_session).create_collection(
            "pages",
            [
                {"name": "heading", "type": "string"},
                {"name": "slug", "type": "slug", "generateFrom": "heading"},
            ],
        )
        entry = await service.create_entry(collection.id, {"heading": "About"})
        with pytest.raises(MissingSlugSourceError):
            await service.update_entry(collection.id, entry.id, data={"heading": None})

    @pytest.mark.asyncio
    async def test_update_status_and_position_only(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Draft"})

        updated = await service.update_entry(
            collection.id, entry.id, status=EntryStatus.PUBLISHED, position=7
        )
        assert updated.status == EntryStatus.PUBLISHED
        assert updated.position == 7
        assert updated.data == entry.data
        assert updated.slug == entry.slug

    @pytest.mark.asyncio
    async def test_update_missing_entry(self, service, collection):
        with pytest.raises(EntryNotFoundError):
            await service.update_entry(collection.id, "missing", data={"title": "x"})


class TestListEntries:

    @pytest.mark.asyncio
    async def test_order_position_then_newest(self, db_session, service, collection):
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})
        c = await service.create_entry(collection.id, {"title": "C"})
        await service.update_entry(collection.id, a.id, position=1)
        await service.update_entry(collection.id, b.id, position=1)
        await service.update_entry(collection.id, c.id, position=0)

        model_a = await db_session.get(EntryModel, a.id)
        model_b = await db_session.get(EntryModel, b.id)
        model_b.created_at = model_a.created_at.replace(year=model_a.created_at.year + 1)
        await db_session.commit()

        entries, total = await service.list_entries(collection.id)
        assert total == 3
        assert [e.data["title"] for e in entries] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_status_filter(self, service, collection):
        await service.create_entry(collection.id, {"title": "Draft"})
        await service.create_entry(collection.id, {"title": "Live"}, status=EntryStatus.PUBLISHED)

        entries, total = await service.list_entries(collection.id, status=EntryStatus.PUBLISHED)
        assert total == 1
        assert entries[0].data["title"] == "Live"

    @pytest.mark.asyncio
    async def test_search_and_pagination(self, service, collection):
        for i in range(5):
            await service.create_entry(collection.id, {"title": f"Match {i}"})
        await service.create_entry(collection.id, {"title": "Other"})

        entries, total = await service.list_entries(
            collection.id, search="match", page=2, limit=2
        )
        assert total == 5
        assert [e.data["title"] for e in entries] == ["Match 2", "Match 3"]

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, service, collection):
        await service.create_entry(collection.id, {"title": "100% done"})
        await service.create_entry(collection.id, {"title": "100 done"})

        entries, total = await service.list_entries(collection.id, search="100%")
        assert total == 1
        assert entries[0].data["title"] == "100% done"

    @pytest.mark.asyncio
    async def test_unknown_collection(self, service):
        with pytest.raises(CollectionNotFoundError):
            await service.list_entries("missing")


class TestReorderEntries:

    @pytest.mark.asyncio
    async def test_reorder(self, service, collection):
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})
        c = await service.create_entry(collection.id, {"title": "C"})
        assert await positions(service, collection.id) == {"A": 0, "B": 1, "C": 2}

        await service.reorder_entries(collection.id, [c.id, a.id, b.id])

        assert await positions(service, collection.id) == {"C": 0, "A": 1, "B": 2}
        entries, _ = await service.list_entries(collection.id)
        assert [e.data["title"] for e in entries] == ["C", "A", "B"]

    @pytest.mark.asyncio
    async def test_unlisted_entries_keep_position(self, service, collection):
        a = await service.create_entry(collection.id, {"title": "A"})
        await service.create_entry(collection.id, {"title": "B"})
        c = await service.create_entry(collection.id, {"title": "C"})

        await service.reorder_entries(collection.id, [c.id, a.id])

        assert await positions(service, collection.id) == {"C": 0, "A": 1, "B": 1}

    @pytest.mark.asyncio
    async def test_foreign_id_changes_nothing(self, db_session, service, collection):
        other = await CollectionService(db_session).create_collection(
            "other", [{"name": "title", "type": "string"}]
        )
        stranger = await service.create_entry(other.id, {"title": "X"})
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})

        with pytest.raises(EntryNotFoundError) as exc_info:
            await service.reorder_entries(collection.id, [b.id, stranger.id, a.id])
        assert exc_info.value.entry_id == stranger.id

        assert await positions(service, collection.id) == {"A": 0, "B": 1}
        assert (await service.get_entry(other.id, stranger.id)).position == 0

    @pytest.mark.asyncio
    async def test_duplicate_ids_rejected(self, service, collection):
        a = await service.create_entry(collection.id, {"title": "A"})
        b = await service.create_entry(collection.id, {"title": "B"})

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.reorder_entries(collection.id, [a.id, b.id, a.id])
        assert exc_info.value.details[0].code == "duplicate_id"
        assert await positions(service, collection.id) == {"A": 0, "B": 1}

    @pytest.mark.asyncio
    async def test_empty_list_is_noop(self, service, collection):
        await service.create_entry(collection.id, {"title": "A"})
        await service.reorder_entries(collection.id, [])
        assert await positions(service, collection.id) == {"A": 0}


class TestDeleteAndLookup:

    @pytest.mark.asyncio
    async def test_delete(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Gone"})
        await service.delete_entry(collection.id, entry.id)

        with pytest.raises(EntryNotFoundError):
            await service.get_entry(collection.id, entry.id)
        with pytest.raises(EntryNotFoundError):
            await service.delete_entry(collection.id, entry.id)

    @pytest.mark.asyncio
    async def test_get_entry_scoped_to_collection(self, db_session, service, collection):
        other = await CollectionService(db_session).create_collection(
            "other", [{"name": "title", "type": "string"}]
        )
        entry = await service.create_entry(collection.id, {"title": "Mine"})
        with pytest.raises(EntryNotFoundError):
            await service.get_entry(other.id, entry.id)

    @pytest.mark.asyncio
    async def test_get_published_entry(self, service, collection):
        await service.create_entry(collection.id, {"title": "Hidden"})
        await service.create_entry(collection.id, {"title": "Shown"}, status=EntryStatus.PUBLISHED)

        entry = await service.get_published_entry(collection.id, "shown")
        assert entry.data["title"] == "Shown"
        with pytest.raises(EntryNotFoundError):
            await service.get_published_entry(collection.id, "hidden")

    @pytest.mark.asyncio
    async def test_ensure_unique_slug_excludes_own_entry(self, service, collection):
        entry = await service.create_entry(collection.id, {"title": "Post"})
        assert await service.ensure_unique_slug(collection.id, "post") == "post-2"
        assert await service.ensure_unique_slug(collection.id, "post", entry.id) == "post"
        assert await service.ensure_unique_slug(collection.id, "fresh") == "fresh"
