import re
import typing
from types import SimpleNamespace

import pytest
import regex

from look.regex_engine import PatternArg, escape_literal, pattern_source, render_template


def _groups(*values):
    return lambda index: values[index] if index < len(values) else None


def test_escape_literal_covers_metacharacters() -> None:
    assert escape_literal("a|b") == r"a\|b"
    assert escape_literal("this? (yup)") == r"this\? \(yup\)"
    assert escape_literal(r"{x}[y]^$+*.\\") == r"\{x\}\[y\]\^\$\+\*\.\\\\"
    assert escape_literal("plain text") == "plain text"


def test_escaped_literal_matches_itself() -> None:
    literal = "1+1=2? [yes] (c) $5.00 | {x} ^_^ a*b\\c"
    assert regex.search(escape_literal(literal), "say " + literal).group(0) == literal


def test_pattern_source() -> None:
    assert pattern_source("a.b") == r"a\.b"
    assert pattern_source(regex.compile(r"a.b")) == "a.b"
    assert pattern_source(SimpleNamespace(pattern=r"\d+")) == r"\d+"
    with pytest.raises(TypeError):
        pattern_source(None)


def test_pattern_arg_covers_strings_and_both_compiled_types() -> None:
    assert set(typing.get_args(PatternArg)) == {str, regex.Pattern, re.Pattern}
    for pattern in ("a.b", regex.compile("a.b"), re.compile("a.b")):
        assert isinstance(pattern, typing.get_args(PatternArg))


def test_render_whole_match_and_groups() -> None:
    group = _groups("the string as", "string")
    assert render_template("$&", group) == "the string as"
    assert render_template("<$1>", group) == "<string>"
    assert render_template("$2", group) == ""


def test_render_dollar_escapes() -> None:
    group = _groups("m", "g")
    assert render_template("$ $$ $", group) == "$ $ $"
    assert render_template("$$1", group) == "$1"
    assert render_template("$$$1", group) == "$g"


def test_render_leaves_unknown_sequences() -> None:
    group = _groups("m", "g")
    assert render_template("$0 $x $` $'", group) == "$0 $x $` $'"
    assert render_template("$10", group) == "g0"
    assert render_template("cost: $", group) == "cost: $"
