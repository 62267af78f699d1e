"""Tests for the process entrypoint (argument parsing, config wiring)."""

from __future__ import annotations

from typing import Any

import pytest

from marquee.interfaces.cli import cli


class TestParseArgs:
    def test_defaults(self) -> None:
        args = cli._parse_args([])
        assert args.host is None
        assert args.port is None
        assert args.debounce_ms is None

    def test_invalid_log_level(self) -> None:
        with pytest.raises(SystemExit):
            cli._parse_args(["--log-level", "TRACE"])


class TestStart:
    def test_wires_overrides_and_runs_uvicorn(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: dict[str, Any] = {}
        monkeypatch.setattr(
            cli.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs)
        )
        monkeypatch.setattr(cli, "configure_logging", lambda config: {"version": 1})

        cli.start(
            ["--host", "127.0.0.1", "--port", "9000", "--debounce-ms", "120", "--log-level", "DEBUG"]
        )

        assert calls["host"] == "127.0.0.1"
        assert calls["port"] == 9000
        assert calls["log_config"] == {"version": 1}
        config = calls["app"].state.config
        assert config.search.debounce_ms == 120
        assert config.log_level == "DEBUG"
