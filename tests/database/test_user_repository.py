"""Tests for UserRepository lookups and the bootstrap claim."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.cosmos.exceptions import CosmosResourceExistsError

from inkwell.database.repositories.users import BOOTSTRAP_ID, UserRepository
from inkwell.errors import AdminAlreadyExists
from inkwell.models.user import User


class TestUserRepository:
    @pytest.fixture
    def repo(self) -> UserRepository:
        mock_db = MagicMock()
        mock_db.get_container_client.return_value = AsyncMock()
        return UserRepository(mock_db)

    def test_uses_users_container(self, repo: UserRepository) -> None:
        assert repo.name == "users"

    async def test_get_by_email_normalizes_case(self, repo: UserRepository) -> None:
        user = User(email="test@inkwell.dev", password_hash="x")
        repo.query = AsyncMock(return_value=[user])

        result = await repo.get_by_email("Test@Inkwell.dev")

        assert result == user
        params = repo.query.call_args[0][1]
        assert params == [{"name": "@email", "value": "test@inkwell.dev"}]

    async def test_get_by_email_missing(self, repo: UserRepository) -> None:
        repo.query = AsyncMock(return_value=[])

        assert await repo.get_by_email("nobody@inkwell.dev") is None

    async def test_get_missing_user(self, repo: UserRepository) -> None:
        repo.read_document = AsyncMock(return_value=None)

        assert await repo.get("user-1") is None

    async def test_bootstrap_document_is_not_a_user(self, repo: UserRepository) -> None:
        repo.read_document = AsyncMock()

        assert await repo.get(BOOTSTRAP_ID) is None
        repo.read_document.assert_not_called()

    async def test_count_ignores_bootstrap_document(self, repo: UserRepository) -> None:
        repo.scalar = AsyncMock(return_value=2)

        assert await repo.count_all() == 2
        assert "IS_DEFINED(c.email)" in repo.scalar.call_args[0][0]


class TestBootstrapClaim:
    @pytest.fixture
    def repo(self) -> UserRepository:
        mock_db = MagicMock()
        mock_db.get_container_client.return_value = AsyncMock()
        return UserRepository(mock_db)

    async def test_creates_fixed_id_document(self, repo: UserRepository) -> None:
        await repo.claim_bootstrap("user-1")

        body = repo._container.create_item.call_args.kwargs["body"]  # noqa: SLF001
        assert body["id"] == BOOTSTRAP_ID
        assert body["user_id"] == "user-1"

    async def test_second_claim_is_rejected(self, repo: UserRepository) -> None:
        repo._container.create_item.side_effect = CosmosResourceExistsError(  # noqa: SLF001
            status_code=409, message="Conflict"
        )

        with pytest.raises(AdminAlreadyExists):
            await repo.claim_bootstrap("user-2")
