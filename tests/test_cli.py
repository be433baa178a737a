"""Tests for the arith CLI and config."""

from __future__ import annotations

import pytest

from arith import __version__
from arith.cli import main
from arith.config import ArithConfig, find_config, load_config


@pytest.fixture
def config_file(tmp_path):
    """Write an arith.toml with a custom prompt and rpn mode."""
    toml = tmp_path / "arith.toml"
    toml.write_text(
        '[repl]\nprompt = "calc> "\nmode = "rpn"\n'
        "[diagnostics]\ncolor = false\n"
    )
    return toml


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner, no_config):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ["eval", "rpn", "view", "format", "tokens", "repl"]:
            assert command in result.output

    def test_version(self, runner, no_config):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_eval(self, runner, no_config):
        result = runner.invoke(main, ["eval", "1 + 2 * 3 - -10"])
        assert result.exit_code == 0
        assert result.output.strip() == "17"

    def test_eval_leading_sign(self, runner, no_config):
        result = runner.invoke(main, ["eval", "--", "-4 * 2"])
        assert result.exit_code == 0
        assert result.output.strip() == "-8"

    def test_eval_division_by_zero(self, runner, no_config):
        result = runner.invoke(main, ["eval", "1 / 0"])
        assert result.exit_code == 1
        assert "division by zero" in result.output
        assert "1 / 0\n^^^^^" in result.output

    def test_rpn(self, runner, no_config):
        result = runner.invoke(main, ["rpn", "1 + 2 * 3 - -10"])
        assert result.exit_code == 0
        assert result.output.strip() == "1 2 3 * + -10"

    def test_rpn_parse_error(self, runner, no_config):
        result = runner.invoke(main, ["rpn", "(1 + 2"])
        assert result.exit_code == 1
        assert "'(' is not closed" in result.output
        assert "(1 + 2\n^" in result.output

    def test_redundant_expression_diagnostic(self, runner, no_config):
        result = runner.invoke(main, ["eval", "1 2 3"])
        assert result.exit_code == 1
        assert "1 2 3\n  ^^^" in result.output

    def test_view(self, runner, no_config):
        result = runner.invoke(main, ["view", "1 - -2"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Binary - @0-6",
            "  Num 1 @0-1",
            "  Unary - @4-6",
            "    Num 2 @5-6",
        ]

    def test_format(self, runner, no_config):
        result = runner.invoke(main, ["format", "((1))+2*(3)"])
        assert result.exit_code == 0
        assert result.output.strip() == "1 + 2 * 3"

    def test_format_color(self, runner, no_config):
        result = runner.invoke(main, ["format", "--color", "1+2"])
        assert result.exit_code == 0
        assert "\033[" in result.output

    def test_tokens(self, runner, no_config):
        result = runner.invoke(main, ["tokens", "12*(3)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "NUMBER '12' 0-2",
            "ASTERISK '*' 2-3",
            "LPAREN '(' 3-4",
            "NUMBER '3' 4-5",
            "RPAREN ')' 5-6",
        ]

    def test_tokens_invalid_char(self, runner, no_config):
        result = runner.invoke(main, ["tokens", "1 @ 2"])
        assert result.exit_code == 1
        assert "invalid character '@'" in result.output

    def test_eval_deep_nesting(self, runner, no_config):
        source = "(" * 200 + "1" + ")" * 200
        result = runner.invoke(main, ["eval", source])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "'(' is not expected" in result.output
        assert "nested deeper than 64 levels" in result.output

    def test_verbose(self, runner, no_config):
        result = runner.invoke(main, ["--verbose", "eval", "2 * 3"])
        assert result.exit_code == 0
        assert "6" in result.output


class TestRepl:
    def test_evaluates_each_line(self, runner, no_config):
        result = runner.invoke(main, ["repl"], input="1 + 2\n3 * 4\n")
        assert result.exit_code == 0
        assert "3\n" in result.output
        assert "12\n" in result.output

    def test_error_does_not_end_session(self, runner, no_config):
        result = runner.invoke(main, ["repl"], input="1 @ 2\n5 - 1\n")
        assert result.exit_code == 0
        assert "invalid character '@'" in result.output
        assert "4\n" in result.output

    def test_exit_and_quit(self, runner, no_config):
        for word in ["exit", "quit"]:
            result = runner.invoke(main, ["repl"], input=f"{word}\n1 + 1\n")
            assert result.exit_code == 0
            assert "2" not in result.output

    def test_blank_lines_skipped(self, runner, no_config):
        result = runner.invoke(main, ["repl"], input="\n   \n7\n")
        assert result.exit_code == 0
        assert "7\n" in result.output
        assert "error" not in result.output

    def test_deep_nesting_does_not_end_session(self, runner, no_config):
        deep = "(" * 200 + "1" + ")" * 200
        result = runner.invoke(main, ["repl"], input=f"{deep}\n2 + 2\n")
        assert result.exit_code == 0
        assert result.exception is None
        assert "'(' is not expected" in result.output
        assert "4\n" in result.output

    def test_mode_option(self, runner, no_config):
        result = runner.invoke(main, ["repl", "--mode", "rpn"], input="1 - 2 - 3\n")
        assert "1 2 - 3 -" in result.output

    def test_prompt_and_mode_from_config(self, runner, config_file):
        result = runner.invoke(
            main, ["--config", str(config_file), "repl"], input="1 + 2\n",
        )
        assert result.exit_code == 0
        assert "calc> " in result.output
        assert "1 2 +" in result.output


# --- Config tests ---


class TestConfig:
    def test_load_config(self, config_file):
        config = load_config(config_file)
        assert config.repl.prompt == "calc> "
        assert config.repl.mode == "rpn"
        assert config.diagnostics.color is False

    def test_load_config_defaults(self, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text("")
        config = load_config(toml)
        assert config == ArithConfig()
        assert config.repl.prompt == "> "
        assert config.repl.mode == "eval"
        assert config.diagnostics.color is True

    def test_load_config_invalid_mode(self, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text('[repl]\nmode = "compile"\n')
        with pytest.raises(ValueError, match="unknown repl mode"):
            load_config(toml)

    def test_invalid_mode_reported_by_cli(self, runner, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text('[repl]\nmode = "compile"\n')
        result = runner.invoke(main, ["--config", str(toml), "eval", "1"])
        assert result.exit_code == 1
        assert "unknown repl mode" in result.output

    def test_load_config_non_string_prompt(self, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text("[repl]\nprompt = 5\n")
        with pytest.raises(ValueError, match="repl.prompt must be a string"):
            load_config(toml)

    def test_load_config_non_bool_color(self, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text('[diagnostics]\ncolor = "false"\n')
        with pytest.raises(ValueError, match="diagnostics.color must be true or false"):
            load_config(toml)

    def test_invalid_color_reported_by_cli(self, runner, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text('[diagnostics]\ncolor = "false"\n')
        result = runner.invoke(main, ["--config", str(toml), "eval", "1 / 0"])
        assert result.exit_code == 1
        assert "diagnostics.color must be true or false" in result.output

    def test_invalid_prompt_reported_by_cli(self, runner, tmp_path):
        toml = tmp_path / "arith.toml"
        toml.write_text("[repl]\nprompt = 5\n")
        result = runner.invoke(main, ["--config", str(toml), "repl"], input="1\n")
        assert result.exit_code == 1
        assert "repl.prompt must be a string" in result.output

    def test_find_config(self, config_file):
        sub = config_file.parent / "a" / "b"
        sub.mkdir(parents=True)
        assert find_config(sub) == config_file

    def test_find_config_not_found(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(FileNotFoundError, match="No arith.toml found"):
            find_config(empty)

    def test_config_discovered_from_cwd(self, runner, config_file, monkeypatch):
        monkeypatch.chdir(config_file.parent)
        result = runner.invoke(main, ["repl"], input="2 * 3\n")
        assert "calc> " in result.output
        assert "2 3 *" in result.output
