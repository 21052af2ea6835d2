"""
High-level use cases for the store API.

Services orchestrate the in-memory store and the persistence adapter. Routers
(FastAPI endpoints) call these services instead of touching the store or the
JSON file directly.
"""
