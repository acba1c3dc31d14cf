import sys
from pathlib import Path

import pytest

# Ensure project root, libs, and pods are importable in tests
ROOT = Path(__file__).resolve().parent.parent
for p in (ROOT, ROOT / "libs", ROOT / "pods"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from hfcore.config import get_settings  # noqa: E402

HF_ENV_VARS = (
    "HF_LOG_LEVEL",
    "HF_OTEL_ENDPOINT",
    "HF_DEFAULT_ROOT",
    "HF_DEFAULT_SCALE",
    "HF_BASE_OCTAVE",
    "HF_HARMONY_PORT",
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate each test from HF_* variables and memoized settings."""
    for key in HF_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
