"""Read-only queries executed against a request-scoped cluster client."""
