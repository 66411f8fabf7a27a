"""Tests for environment configuration (config.py)."""

import pytest

from config import DEFAULT_API_URL, Config, clear_config_cache, get_config, load_config


class TestLoadConfig:

    def test_reads_environment(self) -> None:
        config = load_config()

        assert config.api_url == "https://sidvy.test/api"
        assert config.api_token == "test-token"
        assert config.default_workspace_id == "ws_1"
        assert config.debug is False

    def test_missing_token_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIDVY_API_TOKEN", "")
        with pytest.raises(ValueError, match="SIDVY_API_TOKEN"):
            load_config()

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIDVY_API_URL", "")
        monkeypatch.setenv("SIDVY_DEFAULT_WORKSPACE_ID", "")

        config = load_config()

        assert config.api_url == DEFAULT_API_URL
        assert config.default_workspace_id is None

    @pytest.mark.parametrize("value,expected", [("true", True), ("TRUE", True), ("1", False), ("", False)])
    def test_debug_flag(self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
        monkeypatch.setenv("DEBUG", value)
        assert load_config().debug is expected


class TestCache:

    def test_cached_until_cleared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_config()
        monkeypatch.setenv("SIDVY_API_TOKEN", "rotated")

        assert get_config() is first
        clear_config_cache()
        assert get_config().api_token == "rotated"

    def test_with_changes_is_a_copy(self) -> None:
        base = Config(api_token="a")
        changed = base.with_changes(debug=True)

        assert changed.debug is True
        assert base.debug is False
        assert changed.api_token == "a"
