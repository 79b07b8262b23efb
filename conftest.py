"""Global pytest configuration."""

import os

# Keep client state out of the working tree during tests
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DEMO_FALLBACK", "true")
