"""Tests for configuration loading."""

from pathlib import Path

import pytest

from oddsgame.config import ConfigError, get_config, load_config


class TestLoadConfig:

    def test_defaults(self):
        config = load_config({})

        assert config.game_timeout_ms == 120_000
        assert config.min_odds_max == 2
        assert config.max_odds_max == 10_000
        assert config.log_level == "INFO"
        assert config.log_to_file is False
        assert config.logs_path == Path("logs")

    def test_reads_environment_strings(self):
        config = load_config({
            "GAME_TIMEOUT_MS": "1000",
            "MIN_ODDS_MAX": "3",
            "MAX_ODDS_MAX": "50",
            "LOG_TO_FILE": "true",
            "UNRELATED": "ignored",
        })

        assert config.game_timeout_ms == 1000
        assert config.min_odds_max == 3
        assert config.max_odds_max == 50
        assert config.log_to_file is True

    def test_empty_value_falls_back_to_default(self):
        assert load_config({"GAME_TIMEOUT_MS": ""}).game_timeout_ms == 120_000

    @pytest.mark.parametrize("env, field", [
        ({"GAME_TIMEOUT_MS": "0"}, "game_timeout_ms"),
        ({"GAME_TIMEOUT_MS": "soon"}, "game_timeout_ms"),
        ({"MIN_ODDS_MAX": "1"}, "min_odds_max"),
    ])
    def test_invalid_values(self, env, field):
        with pytest.raises(ConfigError) as exc_info:
            load_config(env)
        assert field in exc_info.value.field_errors

    def test_min_above_max(self):
        with pytest.raises(ConfigError, match="MIN_ODDS_MAX"):
            load_config({"MIN_ODDS_MAX": "20", "MAX_ODDS_MAX": "10"})


class TestGetConfig:

    def test_cached(self, monkeypatch):
        monkeypatch.setenv("GAME_TIMEOUT_MS", "2500")

        config = get_config()
        assert config.game_timeout_ms == 2500
        assert get_config() is config
