"""Settings validation."""

import pytest
from pydantic import ValidationError

from inventory_console.core.config import Settings, get_settings


def test_defaults_match_dashboard_policy() -> None:
    settings = Settings()
    assert settings.dashboard_stale_after_seconds == 60
    assert settings.dashboard_refetch_interval_seconds == 30
    assert settings.locations_stale_after_seconds == 300
    assert settings.internal_search_path == "/products"


@pytest.mark.parametrize(
    "overrides",
    [
        {"dashboard_stale_after_seconds": 0},
        {"dashboard_refetch_interval_seconds": -5},
        {"refetch_max_backoff_seconds": 10, "dashboard_refetch_interval_seconds": 30},
        {"cache_max_entries": 0},
        {"internal_search_path": "products"},
    ],
)
def test_invalid_settings_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_REFETCH_INTERVAL_SECONDS", "15")
    get_settings.cache_clear()
    try:
        assert get_settings().dashboard_refetch_interval_seconds == 15
    finally:
        get_settings.cache_clear()
