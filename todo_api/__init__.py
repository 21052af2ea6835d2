"""Task/user store exposed over HTTP, persisted to a single JSON file."""
