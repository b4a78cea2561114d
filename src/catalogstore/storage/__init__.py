# ABOUTME: Storage layer: blob store, backend protocols, and the JSON file backend.
# ABOUTME: The SQLite backend lives in catalogstore.db.
