"""Cosmos DB SQL builders for the read query options."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inkwell.models.query import Query

# Cosmos DB requires LIMIT whenever OFFSET is used.
_UNBOUNDED = 2_147_483_647

Parameters = list[dict[str, Any]]


def where_clause(query: Query, conditions: list[str]) -> tuple[str, Parameters]:
    """Join fixed ``conditions`` with the query's equality predicates."""
    clauses = list(conditions)
    parameters: Parameters = []
    for index, (name, value) in enumerate(query.where.items()):
        param = f"@w{index}"
        clauses.append(f'c.fields["{name}"] = {param}')
        parameters.append({"name": param, "value": value})
    if not clauses:
        return "", parameters
    return " WHERE " + " AND ".join(clauses), parameters


def projection(query: Query, meta_paths: tuple[str, ...]) -> str:
    """Select clause; ``select`` narrows ``fields`` but always keeps id and metadata."""
    if not query.select:
        return "SELECT *"
    picked = ", ".join(f'"{name}": c.fields["{name}"]' for name in query.select)
    kept = ", ".join(f"c.{path}" for path in ("id", *meta_paths))
    return f"SELECT {kept}, {{{picked}}} AS fields"


def order_by(query: Query) -> str:
    if query.sort_field:
        direction = "DESC" if query.descending else "ASC"
        return f' ORDER BY c.fields["{query.sort_field}"] {direction}'
    return " ORDER BY c.meta.created.at ASC"


def page(query: Query) -> tuple[str, Parameters]:
    if query.skip is None and query.limit is None:
        return "", []
    return " OFFSET @skip LIMIT @limit", [
        {"name": "@skip", "value": query.skip or 0},
        {"name": "@limit", "value": query.limit or _UNBOUNDED},
    ]


def find_sql(
    query: Query, conditions: list[str], meta_paths: tuple[str, ...]
) -> tuple[str, Parameters]:
    """Full ``find`` statement: projection, filter, order and page."""
    where, parameters = where_clause(query, conditions)
    paging, page_parameters = page(query)
    sql = f"{projection(query, meta_paths)} FROM c{where}{order_by(query)}{paging}"
    return sql, parameters + page_parameters


def count_sql(query: Query, conditions: list[str]) -> tuple[str, Parameters]:
    where, parameters = where_clause(query, conditions)
    return f"SELECT VALUE COUNT(1) FROM c{where}", parameters


def exists_sql(query: Query, conditions: list[str]) -> tuple[str, Parameters]:
    where, parameters = where_clause(query, conditions)
    return f"SELECT TOP 1 c.id FROM c{where}", parameters
