"""Root conftest — environment for every test run.

Set before any decision_twin import so get_settings() sees it: no real
Anthropic key, no on-disk database, predictable share URLs.
"""

import os

os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PUBLIC_BASE_URL", "http://twin.test")
os.environ.setdefault("LOG_FORMAT", "text")
