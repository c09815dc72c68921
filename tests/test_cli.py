"""Tests for the command line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from chimptype.__main__ import main, parse_args


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.config is None
        assert args.words is None
        assert args.file is None
        assert args.log_level is None

    def test_values(self):
        args = parse_args(["-c", "conf.json", "-n", "40", "-f", "w.json", "--log-level", "debug"])
        assert args.config == Path("conf.json")
        assert args.words == 40
        assert args.file == "w.json"
        assert args.log_level == "DEBUG"

    def test_rejects_zero_words(self):
        with pytest.raises(SystemExit):
            parse_args(["-n", "0"])

    def test_rejects_unknown_level(self):
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "chatty"])


class TestMain:
    def test_runs_app_with_settings(self, monkeypatch, tmp_path):
        seen = {}

        def fake_run(self):
            seen["settings"] = self.settings

        monkeypatch.setattr("chimptype.app.ChimpTypeApp.run", fake_run)
        assert main(["-c", str(tmp_path / "none.json"), "-n", "7"]) == 0
        assert seen["settings"].word_count == 7
