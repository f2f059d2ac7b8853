# Area: CLI Tests
"""Tests for the command-line interface."""

import json

import pytest

from imposter_engine.cli import is_demo_mode, main, parse_args


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run in a scratch directory with DEMO_MODE unset and no log file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEMO_MODE", raising=False)
    monkeypatch.setenv("LOG_FILE", "")


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.demo is False
        assert args.players == 4
        assert args.imposters == 1
        assert args.config is None

    def test_demo_options(self):
        args = parse_args(["--demo", "--players", "6", "--imposters", "2"])
        assert (args.demo, args.players, args.imposters) == (True, 6, 2)


class TestDemoModeSources:
    def test_flag(self):
        assert is_demo_mode(parse_args(["--demo"]), {}) is True

    def test_config_key(self):
        assert is_demo_mode(parse_args([]), {"demo_mode": True}) is True

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("DEMO_MODE", "yes")
        assert is_demo_mode(parse_args([]), {}) is True

    def test_off_by_default(self):
        assert is_demo_mode(parse_args([]), {}) is False


class TestMain:
    def test_check_config_prints_effective_config(self, capsys):
        assert main(["--check-config"]) == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["min_players"] == 3
        assert printed["log_file"] == ""

    def test_check_config_reads_file(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tie_display_seconds": 2, "demo_mode": True}))

        assert main(["--check-config", "--config", str(path)]) == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["tie_display_seconds"] == 2
        assert "demo_mode" not in printed

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"min_players": 1}))

        assert main(["--check-config", "--config", str(path)]) == 1
        assert "min_players" in capsys.readouterr().err

    def test_without_demo_needs_python_transport(self, capsys):
        assert main([]) == 1
        assert "demo" in capsys.readouterr().err

    def test_demo_run(self, capsys):
        assert main(["--demo", "--players", "4"]) == 0
        out = capsys.readouterr().out
        assert "Winners:" in out
        assert "Secret word:" in out

    def test_demo_that_cannot_start(self, capsys):
        assert main(["--demo", "--players", "3", "--imposters", "3"]) == 1
        assert "could not start" in capsys.readouterr().err
