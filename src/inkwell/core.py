"""Core bootstrap — schemas, then auth, then one content service per schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from inkwell.auth.service import AuthService
from inkwell.database.repositories.users import UserRepository
from inkwell.database.stores import initialize_models
from inkwell.services import initialize_services

if TYPE_CHECKING:
    from collections.abc import Iterable

    from inkwell.config import Settings
    from inkwell.database.client import CosmosClient
    from inkwell.models.schema import ContentSchema
    from inkwell.services.factory import ContentService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Core:
    auth: AuthService
    services: dict[str, ContentService]

    def service(self, name: str) -> ContentService | None:
        return self.services.get(name)


async def initialize(
    settings: Settings, schemas: Iterable[ContentSchema], cosmos: CosmosClient
) -> Core:
    """Wire stores, auth and services on an initialized Cosmos client."""
    stores = await initialize_models(cosmos, schemas)
    users = UserRepository(cosmos.content)
    auth = AuthService(users, settings.auth)
    services = initialize_services(
        stores, auth.validate_token, commit_retries=settings.app.commit_retries
    )
    logger.info("Core initialized — %d content service(s)", len(services))
    return Core(auth=auth, services=services)
