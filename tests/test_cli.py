"""Tests for the command line program."""
from __future__ import annotations

import json
import logging
import subprocess
import sys

import pytest

from nashfinder import __version__
from nashfinder.cli import EXIT_INTERNAL_ERROR, EXIT_OK, EXIT_USAGE_ERROR, build_parser, main
from nashfinder.core.errors import ExtractionError


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["game.json"])
        assert args.game_file == "game.json"
        assert args.support_sets is None
        assert args.mode == "equilibrium"
        assert args.timeout_ms == 1000
        assert args.json is False

    def test_unknown_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["game.json", "--mode", "fastest"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestMain:
    def test_text_output(self, examples_dir, capsys):
        code = main([str(examples_dir / "matching-pennies.json")])
        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("P1: {H, T} | P2: {H, T}\n\tP1: 0.0 {H: 0.5, T: 0.5}\n")
        assert out.count("no equilibrium") == 15

    def test_explicit_support_sets(self, examples_dir, capsys):
        code = main([str(examples_dir / "matching-pennies.json"), "[H,T][T]"])
        assert code == EXIT_OK
        assert capsys.readouterr().out == "P1: {H, T} | P2: T\n\tno equilibrium\n"

    def test_json_output(self, examples_dir, capsys):
        code = main([str(examples_dir / "battle-of-the-sexes.json"), "--json", "--only-equilibria"])
        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["equilibria_found"] == 3
        assert len(data["results"]) == 3

    def test_best_response_mode(self, examples_dir, capsys):
        code = main([str(examples_dir / "matching-pennies.json"), "--mode", "best-response", "--json"])
        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out)["equilibria_found"] == 9

    def test_parallel_workers(self, examples_dir, capsys):
        code = main([str(examples_dir / "prisoners-dilemma.json"), "--workers", "3", "--only-equilibria"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.startswith("Row: Defect | Column: Defect\n")

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="nashfinder"):
            code = main([str(tmp_path / "missing.json")])
        assert code == EXIT_USAGE_ERROR
        assert "Could not read" in caplog.text

    def test_malformed_game(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"Agents": ["A", "B"], "Actions": [["x"], ["y"]]}', encoding="utf-8")
        assert main([str(path)]) == EXIT_USAGE_ERROR
        assert capsys.readouterr().out == ""

    def test_game_file_not_utf8(self, tmp_path, caplog):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with caplog.at_level(logging.ERROR, logger="nashfinder"):
            code = main([str(path)])
        assert code == EXIT_USAGE_ERROR
        assert "not UTF-8" in caplog.text

    def test_bad_support_sets(self, examples_dir, caplog):
        with caplog.at_level(logging.ERROR, logger="nashfinder"):
            code = main([str(examples_dir / "matching-pennies.json"), "[H][Edge]"])
        assert code == EXIT_USAGE_ERROR
        assert "Edge" in caplog.text

    def test_invalid_option_values(self, examples_dir):
        with pytest.raises(SystemExit) as excinfo:
            main([str(examples_dir / "matching-pennies.json"), "--timeout-ms", "0"])
        assert excinfo.value.code == 2

    def test_too_many_decimals(self, examples_dir):
        with pytest.raises(SystemExit) as excinfo:
            main([str(examples_dir / "matching-pennies.json"), "--decimals", "30"])
        assert excinfo.value.code == 2

    def test_internal_error(self, examples_dir, monkeypatch):
        def broken(*args, **kwargs):
            raise ExtractionError("Solution has no value for utility variable u_first.")

        monkeypatch.setattr("nashfinder.cli.find_equilibria", broken)
        assert main([str(examples_dir / "matching-pennies.json")]) == EXIT_INTERNAL_ERROR


def test_cli_does_not_import_web_stack():
    code = "import sys, nashfinder.cli; print('fastapi' in sys.modules)"
    completed = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True
    )
    assert completed.stdout.strip() == "False"
