from __future__ import annotations

import pytest

from castle.schemas.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
