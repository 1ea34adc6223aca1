from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Mapping

from tertestrial.errors import TemplateResolutionFailure
from tertestrial.rules.core import CURRENT_OR_ABOVE_LINE_CONTENT, MatchRequest, Rule, Var

# {{ name }} or the short form {name}; ${NAME} is left to the shell.
# The short form only applies to known names, so awk '{print}' passes through.
_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}|(?<!\$)\{(\w+)\}")


def render(template: str, values: Mapping[str, object]) -> str:
    """Replace every placeholder in template with its value."""

    def substitute(m: re.Match[str]) -> str:
        name = m.group(1) or m.group(2)
        if m.group(2) and name not in values:
            return m.group(0)
        if name not in values:
            raise TemplateResolutionFailure(
                f"cannot resolve placeholder {{{{{name}}}}}: no field or var named {name!r}",
                "Please make sure the request provides this field or the action defines a var for it",
            )
        return str(values[name])

    return _PLACEHOLDER.sub(substitute, template)


def resolve(rule: Rule, request: MatchRequest) -> str:
    """Fully substituted shell command for a matching rule."""
    values: Dict[str, object] = dict(request.fields)
    for var in rule.vars:
        values[var.name] = compute_var(var, request)
    return render(rule.template, values)


def compute_var(var: Var, request: MatchRequest) -> str:
    if var.source == CURRENT_OR_ABOVE_LINE_CONTENT:
        return _search_upwards(var, request)

    if var.source not in request.fields:
        raise TemplateResolutionFailure(
            f"var {var.name!r} reads field {var.source!r} which the request does not provide"
        )
    text = str(request.fields[var.source])
    m = var.pattern().search(text)
    if not m:
        raise TemplateResolutionFailure(
            f"filter {var.filter!r} of var {var.name!r} does not match {text!r}"
        )
    return m.group(1)


def _search_upwards(var: Var, request: MatchRequest) -> str:
    filename = request.fields.get("filename")
    line = request.fields.get("line")
    if filename is None or line is None:
        raise TemplateResolutionFailure(
            f"var {var.name!r} needs both 'filename' and 'line' in the request"
        )
    try:
        lines = Path(str(filename)).read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateResolutionFailure(f"cannot read {filename}: {exc}") from exc
    try:
        start = int(line)
    except (TypeError, ValueError) as exc:
        raise TemplateResolutionFailure(f"line {line!r} is not a number") from exc

    pattern = var.pattern()
    # line is 1-based; clamp to the file so "past the end" searches from the last line
    for index in range(min(start, len(lines)) - 1, -1, -1):
        m = pattern.search(lines[index])
        if m:
            return m.group(1)
    raise TemplateResolutionFailure(
        f"filter {var.filter!r} of var {var.name!r} matches no line at or above {filename}:{line}"
    )
