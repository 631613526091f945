"""Unit tests for the textclassifier CLI."""

import io
import json

import pytest
from rich.console import Console

from textclassifier import cli


@pytest.fixture
def output(monkeypatch):
    """Capture rich console output."""
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, width=200, color_system=None))
    return buffer


class TestParser:
    def test_subcommands(self):
        parser = cli.create_parser()
        args = parser.parse_args(["classify", "models/x", "hello", "--ratio", "0.5"])
        assert args.func is cli.cmd_classify
        assert args.text == ["hello"]
        assert args.ratio == 0.5

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestCommands:
    def test_labels(self, linear_model_dir, output):
        assert cli.main(["labels", str(linear_model_dir)]) == 0
        text = output.getvalue()
        assert "sports" in text
        assert "politics" in text
        assert "linear" in text

    def test_classify_table(self, linear_model_dir, output):
        assert cli.main(["classify", str(linear_model_dir), "vote on the law"]) == 0
        assert "politics" in output.getvalue()

    def test_classify_json(self, linear_model_dir, output):
        code = cli.main(
            ["classify", str(linear_model_dir), "ball goal cpu", "--ratio", "0.5", "--json"]
        )
        assert code == 0
        payload = json.loads(output.getvalue())
        assert payload[0]["labels"] == ["sports", "tech"]
        assert payload[0]["scores"]["sports"] == 2.0

    def test_classify_stdin(self, linear_model_dir, output, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("cpu code\n\nvote\n"))
        assert cli.main(["classify", str(linear_model_dir), "--json"]) == 0
        payload = json.loads(output.getvalue())
        assert [row["labels"] for row in payload] == [["tech"], ["politics"]]

    def test_check(self, linear_model_dir, output):
        assert cli.main(["check", str(linear_model_dir)]) == 0
        assert "fresh" in output.getvalue()

    def test_error_exit_code(self, tmp_path, output):
        assert cli.main(["labels", str(tmp_path / "missing")]) == 1
        assert "NotFoundError" in output.getvalue()

    def test_invalid_ratio(self, linear_model_dir, output):
        assert cli.main(["classify", str(linear_model_dir), "ball", "--ratio", "2"]) == 1
        assert "InvalidArgumentError" in output.getvalue()
