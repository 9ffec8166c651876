"""API helpers: orjson-backed responses."""
