"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from marquee.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "marquee-test",
        "environment": "test",
        "http": {"timeout_seconds": 15.0, "user_agent": "TestAgent/1.0"},
        "logging": {"level": "DEBUG", "format": "console"},
        "cache": {"dir": str(tmp_path / "cache"), "ttl_seconds": 1800},
        "search": {"debounce_ms": 150},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI — pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "marquee"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 10.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"  # dev → console
        assert config.cache_ttl_seconds == 3600
        assert config.tmdb_api_key is None
        assert config.search.debounce_ms == 300
        assert config.search.min_query_length == 2
        assert [p.name for p in config.playback.providers] == [
            "vidsrc",
            "2embed",
            "superembed",
        ]

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    """YAML values override defaults."""

    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "marquee-test"
        assert config.environment == "test"
        assert config.http_timeout_seconds == 15.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"
        assert config.cache_ttl_seconds == 1800
        assert config.search.debounce_ms == 150
        assert config.search.min_query_length == 2  # default preserved

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_provider_table_replaces_defaults(self, tmp_path: Path) -> None:
        row = {
            "name": "mirror",
            "label": "Mirror",
            "movie_template": "https://mirror.example/m/{id}",
            "show_template": "https://mirror.example/t/{id}",
            "episode_template": "https://mirror.example/t/{id}/{season}/{episode}",
        }
        path = tmp_path / "providers.yaml"
        path.write_text(yaml.dump({"playback": {"providers": [row]}}), encoding="utf-8")

        config = load_config(config_path=path)

        assert [p.name for p in config.playback.providers] == ["mirror"]

    def test_invalid_yaml_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"search": {"debounce_ms": -5}}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_config(config_path=path)

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)


class TestEnvOverrides:
    """Environment variables override YAML and defaults."""

    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MARQUEE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("MARQUEE_SEARCH_DEBOUNCE_MS", "500")

        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.search.debounce_ms == 500
        # YAML values not overridden by ENV stay
        assert config.app_name == "marquee-test"

    def test_plain_tmdb_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_API_KEY", "from-env")

        assert load_config().tmdb_api_key == "from-env"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("MARQUEE_TMDB_LANGUAGE=de-DE\n", encoding="utf-8")

        try:
            config = load_config(dotenv_path=dotenv)
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop("MARQUEE_TMDB_LANGUAGE", None)

        assert config.tmdb_language == "de-DE"

    def test_missing_dotenv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    """CLI overrides beat everything (highest precedence)."""

    def test_cli_overrides_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MARQUEE_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR", "search_debounce_ms": 50},
        )
        assert config.log_level == "ERROR"
        assert config.search.debounce_ms == 50

    def test_cli_overrides_with_sectioned_format(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"http": {"timeout_seconds": 5.0}},
        )
        assert config.http_timeout_seconds == 5.0
