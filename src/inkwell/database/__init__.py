"""Azure Cosmos DB access — client lifecycle, SQL builders and repositories."""
