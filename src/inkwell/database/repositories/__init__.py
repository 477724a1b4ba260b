"""Repository modules for each Cosmos DB container."""

from inkwell.database.repositories.items import ItemRepository
from inkwell.database.repositories.live import LiveRepository
from inkwell.database.repositories.users import UserRepository

__all__ = [
    "ItemRepository",
    "LiveRepository",
    "UserRepository",
]
