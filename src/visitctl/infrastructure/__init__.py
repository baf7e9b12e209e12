"""Infrastructure layer — SQLite ledger storage."""
