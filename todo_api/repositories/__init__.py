"""
Persistence adapters.

These modules encapsulate how the store is written/read (today one JSON file).
Services depend on these helpers rather than touching the file themselves.
"""
