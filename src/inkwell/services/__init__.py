"""Per-schema content services — versioning, publishing and reads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from inkwell.services.factory import ContentService, authenticated, create_service

if TYPE_CHECKING:
    from inkwell.database.stores import SchemaStores
    from inkwell.services.protocols import TokenValidator


def initialize_services(
    stores: dict[str, SchemaStores],
    validate_token: TokenValidator,
    *,
    commit_retries: int = 3,
) -> dict[str, ContentService]:
    """Build one content service per registered schema, keyed by schema name."""
    return {
        name: create_service(
            handles.schema,
            handles.items,
            handles.live,
            validate_token,
            commit_retries=commit_retries,
        )
        for name, handles in stores.items()
    }


__all__ = ["ContentService", "authenticated", "create_service", "initialize_services"]
