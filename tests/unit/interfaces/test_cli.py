"""Tests for the command line entrypoint."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from webteizle.interfaces.cli import cli


class TestParseArgs:
    def test_defaults(self) -> None:
        args = cli._parse_args([])
        assert args.host is None
        assert args.port is None
        assert cli.build_cli_overrides(args) == {}

    def test_overrides(self) -> None:
        args = cli._parse_args(
            [
                "--base-url",
                "https://mirror.example",
                "--log-level",
                "DEBUG",
                "--log-format",
                "json",
            ]
        )
        assert cli.build_cli_overrides(args) == {
            "site_base_url": "https://mirror.example",
            "log_level": "DEBUG",
            "log_format": "json",
        }


class TestStart:
    def test_runs_uvicorn_with_loaded_config(self) -> None:
        with (
            patch.object(cli, "uvicorn") as uvicorn_mock,
            patch.object(cli, "configure_logging", return_value={"version": 1}),
            patch.object(cli, "create_app", return_value=MagicMock()) as create_app,
        ):
            cli.start(["--host", "127.0.0.1", "--port", "9000", "--log-level", "ERROR"])

        config = create_app.call_args.args[0]
        assert config.log_level == "ERROR"
        uvicorn_mock.run.assert_called_once_with(
            create_app.return_value,
            host="127.0.0.1",
            port=9000,
            log_config={"version": 1},
        )
