"""Root conftest — shared test configuration."""

import os

# Importing app.main builds the default app from the environment:
# keep it on the in-memory store and away from any developer .env database
os.environ.setdefault("REPOSITORY_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
