"""Repository for the users container (partitioned by /id)."""

from __future__ import annotations

from datetime import UTC, datetime

from azure.cosmos.exceptions import CosmosResourceExistsError

from inkwell.database.repositories.base import BaseRepository, storage_errors
from inkwell.errors import AdminAlreadyExists
from inkwell.models.user import User

# Fixed id of the document that records the initial admin.
BOOTSTRAP_ID = "bootstrap"


class UserRepository(BaseRepository[User]):
    container_name = "users"
    model_class = User

    async def get(self, user_id: str) -> User | None:
        if user_id == BOOTSTRAP_ID:
            return None
        data = await self.read_document(user_id, user_id)
        return self.from_document(data) if data else None

    async def get_by_email(self, email: str) -> User | None:
        users = await self.query(
            "SELECT * FROM c WHERE c.email = @email",
            [{"name": "@email", "value": email.lower()}],
        )
        return users[0] if users else None

    async def count_all(self) -> int:
        return await self.scalar("SELECT VALUE COUNT(1) FROM c WHERE IS_DEFINED(c.email)")

    async def claim_bootstrap(self, user_id: str) -> None:
        """Create the bootstrap document; only the first claim ever succeeds.

        Raises AdminAlreadyExists when another caller claimed it first.
        """
        body = {
            "id": BOOTSTRAP_ID,
            "user_id": user_id,
            "claimed_at": datetime.now(UTC).isoformat(),
        }
        with storage_errors(f"create in {self.name}"):
            try:
                await self._container.create_item(body=body)
            except CosmosResourceExistsError as exc:
                raise AdminAlreadyExists from exc
