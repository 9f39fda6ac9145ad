"""Unit tests for gig_engine.config.

Verifies that Settings can be constructed without error, that all fields
carry their expected defaults when no environment variables are set, and
that the classifier thresholds can be built from them.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gig_engine.config import Settings, get_settings, reset_settings
from gig_engine.status import StatusRules


@pytest.fixture(autouse=True)
def _reset(monkeypatch, tmp_path):
    """Reset the singleton and keep stray .env files out of the way."""
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


class TestSettingsConstruction:
    def test_constructs_without_error(self):
        s = Settings()
        assert s is not None

    def test_get_settings_returns_settings_instance(self):
        s = get_settings()
        assert isinstance(s, Settings)

    def test_get_settings_is_singleton(self):
        assert get_settings() is get_settings()

    def test_reset_settings_clears_singleton(self):
        s1 = get_settings()
        reset_settings()
        s2 = get_settings()
        assert s1 is not s2


class TestSettingsDefaults:
    def test_closing_soon_days_default(self):
        assert Settings().closing_soon_days == 3

    def test_new_window_days_default(self):
        assert Settings().new_window_days == 2

    def test_strict_dates_default_is_false(self):
        assert Settings().strict_dates is False

    def test_default_sort_is_priority(self):
        assert Settings().default_sort == "priority"


class TestSettingsEnvOverride:
    def test_closing_soon_days_read_from_env(self, monkeypatch):
        monkeypatch.setenv("GE_CLOSING_SOON_DAYS", "5")
        assert Settings().closing_soon_days == 5

    def test_strict_dates_can_be_enabled(self, monkeypatch):
        monkeypatch.setenv("GE_STRICT_DATES", "true")
        assert Settings().strict_dates is True

    def test_prefix_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ge_new_window_days", "1")
        assert Settings().new_window_days == 1

    def test_negative_threshold_rejected(self, monkeypatch):
        monkeypatch.setenv("GE_NEW_WINDOW_DAYS", "-1")
        with pytest.raises(ValidationError):
            Settings()

    def test_dotenv_file_read(self, tmp_path):
        (tmp_path / ".env").write_text("GE_DEFAULT_SORT=newest\n", encoding="utf-8")
        assert Settings().default_sort == "newest"


class TestStatusRulesFromSettings:
    def test_defaults_match_default_rules(self):
        assert StatusRules.from_settings(Settings()) == StatusRules()

    def test_env_overrides_flow_into_rules(self, monkeypatch):
        monkeypatch.setenv("GE_CLOSING_SOON_DAYS", "7")
        monkeypatch.setenv("GE_NEW_WINDOW_DAYS", "0")
        assert StatusRules.from_settings(Settings()) == StatusRules(
            closing_soon_days=7, new_window_days=0
        )
