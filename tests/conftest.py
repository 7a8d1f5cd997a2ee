"""Root conftest: shared test configuration."""

import os

# Ensure tests never write into a real data directory
os.environ.setdefault("GRADBOOK_STORAGE_BACKEND", "memory")
os.environ.setdefault("GRADBOOK_SEED_DEMO_DATA", "false")
os.environ.setdefault("GRADBOOK_LOG_FORMAT", "text")
