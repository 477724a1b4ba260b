"""HTTP routes for auth, token-guarded content and public live reads."""
