"""Infrastructure : persistance SQLite."""
