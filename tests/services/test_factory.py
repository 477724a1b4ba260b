"""Tests for the per-schema content service and its token guard."""

from __future__ import annotations

import pytest

from inkwell.database.stores import SchemaStores
from inkwell.errors import InvalidToken, MissingId, MissingItem
from inkwell.models.schema import ContentSchema
from inkwell.services import initialize_services
from inkwell.services.factory import ContentService
from tests.fakes import TOKEN, USER, FakeItemStore, FakeLiveStore, TokenChecker

_GUARDED = {
    "any": (),
    "count": (),
    "find": (),
    "get": ("some-id",),
    "create": ({"name": "Ryan"},),
    "update": ("some-id", {"name": "Ryan"}),
    "patch": ("some-id", {"age": 1}),
    "remove": ("some-id",),
    "publish": ("some-id",),
    "unpublish": ("some-id",),
    "is_live": ("some-id",),
    "history": ("some-id",),
    "preview": ("some-id", 1),
    "restore": ("some-id", 1),
}


class TestServiceShape:
    def test_exposes_every_operation(self, service: ContentService) -> None:
        for name in _GUARDED:
            assert callable(getattr(service, name))

    def test_exposes_live_reads(self, service: ContentService) -> None:
        for name in ("any", "count", "find", "get"):
            assert callable(getattr(service.live, name))

    def test_one_service_per_schema(
        self, schema: ContentSchema, token_checker: TokenChecker
    ) -> None:
        other = ContentSchema("AnotherExample", schema.model)
        stores = {
            s.name: SchemaStores(schema=s, items=FakeItemStore(), live=FakeLiveStore())
            for s in (schema, other)
        }

        services = initialize_services(stores, token_checker)

        assert set(services) == {"Example", "AnotherExample"}
        assert services["AnotherExample"].schema is other


class TestTokenGuard:
    """Every operation except live reads needs a valid token."""

    @pytest.mark.parametrize(("operation", "args"), list(_GUARDED.items()))
    @pytest.mark.parametrize("token", [None, "", "forged"])
    async def test_rejects_invalid_token_before_storage(
        self,
        service: ContentService,
        items: FakeItemStore,
        live: FakeLiveStore,
        operation: str,
        args: tuple,
        token: str | None,
    ) -> None:
        created = await service.create(TOKEN, {"name": "Ryan"})
        before = {k: list(v) for k, v in items.versions_by_id.items()}

        with pytest.raises(InvalidToken):
            await getattr(service, operation)(token, *args)

        assert items.versions_by_id == before
        assert live.snapshots == {}
        assert created.id in items.versions_by_id

    async def test_token_checked_before_arguments(self, service: ContentService) -> None:
        with pytest.raises(InvalidToken):
            await service.update(None, None, None)
        with pytest.raises(MissingId):
            await service.update(TOKEN, None, None)
        with pytest.raises(MissingItem):
            await service.update(TOKEN, "some-id", None)

    async def test_user_from_token_signs_versions(self, service: ContentService) -> None:
        item = await service.create(TOKEN, {"name": "Ryan"})

        assert item.meta.created.by == USER

    async def test_live_reads_need_no_token(
        self, service: ContentService, token_checker: TokenChecker
    ) -> None:
        item = await service.create(TOKEN, {"name": "Ryan"})
        await service.publish(TOKEN, item.id)
        calls = token_checker.calls

        assert await service.live.any() is True
        assert await service.live.count() == 1
        assert len(await service.live.find()) == 1
        assert await service.live.get(item.id) is not None
        assert token_checker.calls == calls


class TestEndToEnd:
    async def test_published_snapshot_survives_content_edits(
        self, service: ContentService
    ) -> None:
        """Verify live.get serves the published version while content moves on."""
        item = await service.create(TOKEN, {"name": "Ryan", "age": 24})
        await service.publish(TOKEN, item.id)

        replaced = await service.update(TOKEN, item.id, {"name": "Ryan", "age": 25})
        current = await service.get(TOKEN, item.id)
        snapshot = await service.live.get(item.id)

        assert replaced is not None
        assert replaced.model_dump() == item.model_dump()
        assert current is not None
        assert current.meta.version == 2
        assert current.fields == {"name": "Ryan", "age": 25}
        assert snapshot is not None
        assert snapshot.version == 1
        assert snapshot.fields["age"] == 24

        await service.unpublish(TOKEN, item.id)
        assert await service.is_live(TOKEN, item.id) is False
        assert await service.live.get(item.id) is None
