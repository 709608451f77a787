# tests/conftest.py
import pytest

from aliases import config
from aliases.config import AliasSettings


@pytest.fixture
def alias_settings(monkeypatch):
    """
    Swap the module-level settings for the duration of a test.

    Usage: ``alias_settings(ALIASES_LEGACY_ORDER="error")``.
    """

    def _apply(**overrides):
        patched = AliasSettings(**overrides)
        monkeypatch.setattr(config, "settings", patched)
        return patched

    return _apply
