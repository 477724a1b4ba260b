"""Tests for core bootstrap wiring."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from inkwell.config import AppConfig, AuthConfig, CosmosConfig, Settings
from inkwell.core import initialize
from inkwell.database.repositories.items import ItemRepository
from inkwell.database.repositories.live import LiveRepository
from inkwell.database.stores import initialize_models
from inkwell.models.schema import ContentSchema
from inkwell.services.factory import ContentService
from tests.fakes import Example


@pytest.fixture
def cosmos() -> MagicMock:
    client = MagicMock()
    client.content = MagicMock()
    client.content.create_container_if_not_exists = AsyncMock()
    client.live = MagicMock()
    client.live.create_container_if_not_exists = AsyncMock()
    return client


def _settings() -> Settings:
    return Settings(
        cosmos=CosmosConfig(endpoint="https://cosmos.example.com", key="k"),
        auth=AuthConfig(secret="some-secret-long-enough-for-hs256-signing"),
        app=AppConfig(env="test", commit_retries=2),
    )


async def test_initialize_models_creates_both_containers(cosmos: MagicMock) -> None:
    schema = ContentSchema("BlogPost", Example)

    stores = await initialize_models(cosmos, [schema])

    content_call = cosmos.content.create_container_if_not_exists.call_args
    live_call = cosmos.live.create_container_if_not_exists.call_args
    assert content_call.kwargs["id"] == "blog_post"
    assert content_call.kwargs["partition_key"].path == "/item_id"
    assert live_call.kwargs["id"] == "blog_post"
    assert live_call.kwargs["partition_key"].path == "/id"
    assert isinstance(stores["BlogPost"].items, ItemRepository)
    assert isinstance(stores["BlogPost"].live, LiveRepository)


async def test_initialize_models_rejects_duplicates(cosmos: MagicMock) -> None:
    schema = ContentSchema("Example", Example)

    with pytest.raises(ValueError, match="registered twice"):
        await initialize_models(cosmos, [schema, schema])


async def test_initialize_builds_service_per_schema(cosmos: MagicMock) -> None:
    schemas = [ContentSchema("Example", Example), ContentSchema("AnotherExample", Example)]

    core = await initialize(_settings(), schemas, cosmos)

    assert set(core.services) == {"Example", "AnotherExample"}
    assert isinstance(core.service("Example"), ContentService)
    assert core.service("Missing") is None
    assert core.auth is not None
