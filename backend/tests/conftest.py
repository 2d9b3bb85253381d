"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use: fix credentials and DB before any import
os.environ.setdefault("LRS_USERNAME", "test-user")
os.environ.setdefault("LRS_PASSWORD", "test-password")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
