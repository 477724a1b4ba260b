"""Shared fixtures: an Example schema wired to in-memory stores."""

from __future__ import annotations

import pytest

from inkwell.models.schema import ContentSchema
from inkwell.services.factory import ContentService, create_service
from tests.fakes import Example, FakeItemStore, FakeLiveStore, TokenChecker


@pytest.fixture
def schema() -> ContentSchema:
    return ContentSchema("Example", Example)


@pytest.fixture
def items() -> FakeItemStore:
    return FakeItemStore()


@pytest.fixture
def live() -> FakeLiveStore:
    return FakeLiveStore()


@pytest.fixture
def token_checker() -> TokenChecker:
    return TokenChecker()


@pytest.fixture
def service(
    schema: ContentSchema,
    items: FakeItemStore,
    live: FakeLiveStore,
    token_checker: TokenChecker,
) -> ContentService:
    return create_service(schema, items, live, token_checker)
