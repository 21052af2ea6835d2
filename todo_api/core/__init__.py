"""
Core utilities shared across the store API.

This package hosts:
- configuration helpers (env vars, data file path, CORS policy)
- logging setup

Routers/services depend on these primitives instead of reading os.environ
directly.
"""
