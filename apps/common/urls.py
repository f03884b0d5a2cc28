"""URL helpers shared by the app routers."""

# Router lookups only match UUIDs, so malformed ids 404 before any query runs.
UUID_PATTERN = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
