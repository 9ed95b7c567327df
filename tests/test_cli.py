"""Tests for the elparser command-line interface."""

import io
import json

import pytest

from elparser import __version__, parse_one
from elparser.cli import main
from elparser.cli.encode_cmd import symbolize_keys
from elparser.cli.parse_cmd import to_json
from elparser.cli.utils import format_error
from elparser.exceptions import ParseError
from elparser.logging import disable_verbose
from elparser.values import Symbol


@pytest.fixture
def stdin(monkeypatch):
    """Replace stdin with the given text."""

    def _set(text):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _set


class TestMain:
    """Top-level dispatch."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "Emacs Lisp S-expression reader and encoder" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_format_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["parse", "--format", "xml"])
        assert exc_info.value.code == 2

    def test_broken_project_config(self, project_dir, capsys):
        (project_dir / ".elparser.toml").write_text("not [ toml")
        assert main(["parse", "-"]) == 1
        assert "Invalid TOML" in capsys.readouterr().err


class TestParseCommand:
    """elparser parse."""

    def test_sexp_output(self, tmp_path, capsys):
        path = tmp_path / "forms.el"
        path.write_text("(1   2 . (3))\n'nil  (a . nil)")

        assert main(["parse", str(path)]) == 0
        assert capsys.readouterr().out.splitlines() == ["(1 2 3)", "'nil", "(a . nil)"]

    def test_stdin(self, stdin, capsys):
        stdin('(setq x "y")')
        assert main(["parse"]) == 0
        assert capsys.readouterr().out == '(setq x "y")\n'

    def test_json_single_form(self, buffer_alist_file, capsys):
        assert main(["parse", str(buffer_alist_file), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0] == ["name", "*scratch*"]
        assert data[4] == ["point", 1, 12]

    def test_json_many_forms(self, stdin, capsys):
        stdin("1 nil (a 1.5)")
        assert main(["parse", "-", "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out) == [1, None, ["a", 1.5]]

    def test_tree(self, stdin, capsys):
        stdin('(a . "b")')
        assert main(["parse", "--format", "tree"]) == 0
        out = capsys.readouterr().out
        assert "cons" in out
        assert "symbol a" in out
        assert 'string "b"' in out

    def test_parse_error(self, stdin, capsys):
        stdin("(1 2")
        assert main(["parse"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Unexpected end of input")
        assert "Suggestions:" in err

    def test_quiet_error(self, stdin, capsys):
        stdin(")")
        assert main(["parse", "-q"]) == 1
        err = capsys.readouterr().err
        assert err == "Error: Unexpected token ')' at position 0\n"

    def test_verbose_error_shows_traceback(self, stdin, capsys):
        stdin("(1 2")
        try:
            assert main(["parse", "-v"]) == 1
        finally:
            disable_verbose()
        err = capsys.readouterr().err
        assert "Traceback (most recent call last)" in err
        assert "ParseError" in err

    def test_deep_input_without_limit(self, stdin, capsys):
        depth = 5000
        stdin("(" * depth + "1" + ")" * depth)
        assert main(["parse", "--max-depth", "0"]) == 0
        assert capsys.readouterr().out.strip() == "(" * depth + "1" + ")" * depth

    def test_deep_input_json(self, stdin, capsys):
        depth = 5000
        stdin("(" * depth + "1" + ")" * depth)
        assert main(["parse", "--max-depth", "0", "--format", "json"]) == 0
        assert capsys.readouterr().out == "[" * depth + "1" + "]" * depth + "\n"

    def test_lexical_error(self, stdin, capsys):
        stdin("(a #b)")
        assert main(["parse"]) == 1
        assert "Scanner error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["parse", str(tmp_path / "missing.el")]) == 1
        assert "FileNotFoundError" in capsys.readouterr().err

    def test_max_depth_option(self, stdin, capsys):
        stdin("((1))")
        assert main(["parse", "--max-depth", "1"]) == 1
        assert "Maximum nesting depth 1 exceeded" in capsys.readouterr().err

    def test_project_config_format(self, project_dir, stdin, capsys):
        (project_dir / ".elparser.toml").write_text('[defaults]\nformat = "json"\n')
        stdin("(a . 1)")
        assert main(["parse"]) == 0
        assert json.loads(capsys.readouterr().out) == ["a", 1]

    def test_project_config_max_depth(self, project_dir, stdin, capsys):
        (project_dir / ".elparser.toml").write_text("[parser]\nmax_depth = 2\n")
        stdin("(((1)))")
        assert main(["parse"]) == 1
        assert "Maximum nesting depth 2" in capsys.readouterr().err

    def test_option_overrides_config(self, project_dir, stdin, capsys):
        (project_dir / ".elparser.toml").write_text('[defaults]\nformat = "json"\n')
        stdin("(a . 1)")
        assert main(["parse", "--format", "sexp"]) == 0
        assert capsys.readouterr().out == "(a . 1)\n"


class TestToJson:
    """JSON text of parsed forms."""

    def test_shapes(self):
        tree = parse_one('(\'a "x" (b . 2.5) (c d . 3) ())')
        assert to_json(tree) == '[["a"], "x", ["b", 2.5], ["c", "d", 3], null]'

    def test_matches_json_dumps(self, buffer_alist):
        tree = parse_one(buffer_alist)
        assert json.loads(to_json(tree)) == json.loads(json.dumps(tree.to_native(), default=str))


class TestEncodeCommand:
    """elparser encode."""

    def test_encode(self, stdin, capsys):
        stdin('[1, 1.5, "x", true, false, null]')
        assert main(["encode"]) == 0
        assert capsys.readouterr().out == '(1 1.5 "x" t nil nil)\n'

    def test_string_keys(self, stdin, capsys):
        stdin('{"a": [1, 2, 3]}')
        assert main(["encode"]) == 0
        assert capsys.readouterr().out == '(("a" 1 2 3))\n'

    def test_symbol_keys(self, stdin, capsys):
        stdin('{"a": {"c": [4, 5, 6]}, "not a symbol": 1}')
        assert main(["encode", "--symbol-keys"]) == 0
        assert capsys.readouterr().out == '((a (c 4 5 6)) ("not a symbol" . 1))\n'

    def test_dot_key_stays_string(self, stdin, capsys):
        stdin('{".": 1, "a": 2}')
        assert main(["encode", "--symbol-keys"]) == 0
        assert capsys.readouterr().out == '(("." . 1) (a . 2))\n'

    def test_many(self, tmp_path, capsys):
        path = tmp_path / "forms.json"
        path.write_text('[1, "two", [3]]')
        assert main(["encode", str(path), "--many", "--separator", " "]) == 0
        assert capsys.readouterr().out == '1 "two" (3)\n'

    def test_many_default_separator(self, stdin, capsys):
        stdin("[1, 2]")
        assert main(["encode", "--many"]) == 0
        assert capsys.readouterr().out == "1\n2\n"

    def test_many_requires_array(self, stdin, capsys):
        stdin('{"a": 1}')
        assert main(["encode", "--many"]) == 1
        assert "requires a top-level JSON array" in capsys.readouterr().err

    def test_invalid_json(self, stdin, capsys):
        stdin("{not json")
        assert main(["encode"]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_project_config(self, project_dir, stdin, capsys):
        (project_dir / ".elparser.toml").write_text(
            '[encoder]\nseparator = ";"\nsymbol_keys = true\n'
        )
        stdin('[{"k": 1}, {"k": 2}]')
        assert main(["encode", "--many"]) == 0
        assert capsys.readouterr().out == "((k . 1));((k . 2))\n"


class TestSymbolizeKeys:
    """Dict keys that read as symbols become Symbols."""

    def test_nested(self):
        assert symbolize_keys({"a": [{"b": 1}], "1x": 2}) == {
            Symbol("a"): [{Symbol("b"): 1}],
            "1x": 2,
        }

    def test_scalars_untouched(self):
        assert symbolize_keys("a") == "a"


class TestConfigCommand:
    """elparser config."""

    def test_show_defaults(self, capsys):
        assert main(["config"]) == 0
        out = capsys.readouterr().out
        assert "# Effective elparser configuration" in out
        assert "[parser]" in out
        assert "max_depth = 200  # from: default" in out
        assert 'separator = "\\n"  # from: default' in out
        assert "symbol_keys = false  # from: default" in out

    def test_show_project_values(self, project_dir, capsys):
        (project_dir / ".elparser.toml").write_text("[parser]\nmax_depth = 8\n")
        assert main(["config", "--show"]) == 0
        assert "max_depth = 8  # from: .elparser.toml" in capsys.readouterr().out

    def test_get(self, project_dir, capsys):
        (project_dir / ".elparser.toml").write_text('[defaults]\nformat = "tree"\n')
        assert main(["config", "get", "defaults.format"]) == 0
        assert capsys.readouterr().out == '"tree"\n'

    @pytest.mark.parametrize("key", ["format", "nosuch.format", "defaults.nosuch"])
    def test_get_bad_key(self, key, capsys):
        assert main(["config", "get", key]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_init(self, project_dir, capsys):
        assert main(["config", "--init"]) == 0
        target = project_dir / ".elparser.toml"
        assert target.is_file()
        assert "[encoder]" in target.read_text()

        assert main(["config", "--init"]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_init_user(self, tmp_path):
        assert main(["config", "--init", "--user"]) == 0
        assert (tmp_path / "user" / "config.toml").is_file()

    def test_paths(self, capsys):
        assert main(["config", "--paths"]) == 0
        out = capsys.readouterr().out
        assert "User config:" in out
        assert "Status: not found" in out


class TestFormatError:
    """Plain-text error formatting."""

    def test_full(self):
        err = ParseError("Bad", token=")", position=2, suggestions=["Fix it"])
        text = format_error(err)
        assert text.startswith("Error: Bad")
        assert "Fix it" in text

    def test_quiet(self):
        err = ParseError("Bad", token=")", position=2, suggestions=["Fix it"])
        assert format_error(err, quiet=True) == "Error: Bad"

    def test_other_exception(self):
        assert format_error(ValueError("nope")) == "Error: ValueError: nope"
