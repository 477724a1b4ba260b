"""Tests for publishing item versions into the live store."""

from __future__ import annotations

import pytest

from inkwell.errors import MissingId, VersionNotFound
from inkwell.models.schema import ContentSchema
from inkwell.services.publishing import PublishEngine
from inkwell.services.versioning import VersionEngine
from tests.fakes import FakeItemStore, FakeLiveStore

USER = "user-1"


@pytest.fixture
def versions(schema: ContentSchema, items: FakeItemStore) -> VersionEngine:
    return VersionEngine(schema, items)


@pytest.fixture
def publishing(items: FakeItemStore, live: FakeLiveStore) -> PublishEngine:
    return PublishEngine(items, live)


class TestPublish:
    """Test the Publish Engine."""

    async def test_publish_current_version(
        self, versions: VersionEngine, publishing: PublishEngine
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan", "age": 24})
        await versions.patch(USER, created.id, {"age": 25})

        snapshot = await publishing.publish(USER, created.id)

        assert snapshot.version == 2
        assert snapshot.fields == {"name": "Ryan", "age": 25}
        assert snapshot.published.by == USER
        assert await publishing.is_live(USER, created.id) is True

    async def test_publish_specific_version(
        self, versions: VersionEngine, publishing: PublishEngine, live: FakeLiveStore
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan", "age": 24})
        await versions.patch(USER, created.id, {"age": 25})

        await publishing.publish(USER, created.id, 1)

        assert live.snapshots[created.id].version == 1
        assert live.snapshots[created.id].fields["age"] == 24

    async def test_publish_overwrites_previous_snapshot(
        self, versions: VersionEngine, publishing: PublishEngine, live: FakeLiveStore
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan"})
        await publishing.publish(USER, created.id)
        await versions.update(USER, created.id, {"name": "Sam"})

        await publishing.publish(USER, created.id)

        assert len(live.snapshots) == 1
        assert live.snapshots[created.id].fields["name"] == "Sam"

    async def test_content_mutations_leave_live_untouched(
        self, versions: VersionEngine, publishing: PublishEngine, live: FakeLiveStore
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan", "age": 24})
        await publishing.publish(USER, created.id)

        await versions.patch(USER, created.id, {"age": 99})
        await versions.remove(USER, created.id)

        snapshot = live.snapshots[created.id]
        assert snapshot.version == 1
        assert snapshot.fields["age"] == 24

    async def test_publish_does_not_write_content(
        self, versions: VersionEngine, publishing: PublishEngine, items: FakeItemStore
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan"})

        await publishing.publish(USER, created.id)

        assert items.commits == 0
        assert len(items.versions_by_id[created.id]) == 1

    async def test_publish_missing_version_fails(
        self, versions: VersionEngine, publishing: PublishEngine, live: FakeLiveStore
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan"})

        with pytest.raises(VersionNotFound):
            await publishing.publish(USER, created.id, 3)
        with pytest.raises(VersionNotFound):
            await publishing.publish(USER, "missing")
        assert live.snapshots == {}

    async def test_publish_requires_id(self, publishing: PublishEngine) -> None:
        with pytest.raises(MissingId):
            await publishing.publish(USER, None)


class TestUnpublish:
    async def test_unpublish_removes_snapshot(
        self, versions: VersionEngine, publishing: PublishEngine
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan"})
        await publishing.publish(USER, created.id)

        await publishing.unpublish(USER, created.id)

        assert await publishing.is_live(USER, created.id) is False

    async def test_unpublish_twice_is_a_no_op(
        self, versions: VersionEngine, publishing: PublishEngine
    ) -> None:
        created = await versions.create(USER, {"name": "Ryan"})
        await publishing.publish(USER, created.id)

        await publishing.unpublish(USER, created.id)
        await publishing.unpublish(USER, created.id)

        assert await publishing.is_live(USER, created.id) is False

    async def test_is_live_false_for_unknown_item(self, publishing: PublishEngine) -> None:
        assert await publishing.is_live(USER, "missing") is False
