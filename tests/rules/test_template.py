from __future__ import annotations

from pathlib import Path

import pytest

from tertestrial.errors import TemplateResolutionFailure
from tertestrial.rules.core import CURRENT_OR_ABOVE_LINE_CONTENT, MatchRequest, Rule, Var
from tertestrial.rules.template import render, resolve


def test_render_tight_and_loose_placeholders() -> None:
    assert render("hello {{world}}", {"world": "universe"}) == "hello universe"
    assert render("hello {{ world }}", {"world": "universe"}) == "hello universe"


def test_render_repeated_placeholder() -> None:
    assert render("{{ hello }} {{ hello }}", {"hello": "bye"}) == "bye bye"


def test_render_short_form_and_leaves_shell_variables_alone() -> None:
    assert render("mocha {filename} ${HOME}", {"filename": "a.spec.js"}) == "mocha a.spec.js ${HOME}"


def test_render_substitutes_literally() -> None:
    assert render("echo {{f}}", {"f": r"a\1b"}) == r"echo a\1b"


def test_render_missing_field_fails() -> None:
    with pytest.raises(TemplateResolutionFailure) as excinfo:
        render("pytest {{filename}}:{{line}}", {"filename": "a.py"})

    assert "line" in excinfo.value.message


def test_resolve_uses_request_fields() -> None:
    rule = Rule(match={"filename": r"\.py$"}, template="pytest {{filename}}:{{line}}")

    assert resolve(rule, MatchRequest({"filename": "a.py", "line": 7})) == "pytest a.py:7"


def test_var_from_field_capture() -> None:
    rule = Rule(
        match={"filename": r"\.rs$"},
        template="cargo test --test {{module}}",
        vars=(Var(name="module", source="filename", filter=r"tests/(\w+)\.rs$"),),
    )

    assert resolve(rule, MatchRequest({"filename": "tests/parser.rs"})) == "cargo test --test parser"


def test_var_filter_without_match_fails() -> None:
    rule = Rule(
        match={},
        template="{{module}}",
        vars=(Var(name="module", source="filename", filter=r"(\d+)"),),
    )

    with pytest.raises(TemplateResolutionFailure):
        resolve(rule, MatchRequest({"filename": "abc"}))


def test_var_from_current_or_above_line(tmp_path: Path) -> None:
    source = tmp_path / "test_math.py"
    source.write_text(
        "def test_add():\n"
        "    assert 1 + 1 == 2\n"
        "\n"
        "def test_sub():\n"
        "    assert 2 - 1 == 1\n",
        encoding="utf-8",
    )
    rule = Rule(
        match={"filename": r"\.py$", "line": r"\d+"},
        template="pytest {{filename}} -k {{name}}",
        vars=(Var(name="name", source=CURRENT_OR_ABOVE_LINE_CONTENT, filter=r"def (test_\w+)"),),
    )

    assert resolve(rule, MatchRequest({"filename": str(source), "line": 5})) == f"pytest {source} -k test_sub"
    assert resolve(rule, MatchRequest({"filename": str(source), "line": 4})) == f"pytest {source} -k test_sub"
    assert resolve(rule, MatchRequest({"filename": str(source), "line": 2})) == f"pytest {source} -k test_add"


def test_var_from_current_or_above_line_without_match(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("nothing\nhere\n", encoding="utf-8")
    var = Var(name="name", source=CURRENT_OR_ABOVE_LINE_CONTENT, filter=r"def (\w+)")
    rule = Rule(match={}, template="{{name}}", vars=(var,))

    with pytest.raises(TemplateResolutionFailure):
        resolve(rule, MatchRequest({"filename": str(source), "line": 2}))


def test_render_leaves_unknown_short_form_braces_to_the_shell() -> None:
    template = "awk '{print}' {filename}"

    assert render(template, {"filename": "out.log"}) == "awk '{print}' out.log"


def test_render_unknown_long_form_still_fails() -> None:
    with pytest.raises(TemplateResolutionFailure):
        render("awk '{{print}}'", {})
