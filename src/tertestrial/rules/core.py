from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Reads the file named by the "filename" field and searches upwards from "line".
CURRENT_OR_ABOVE_LINE_CONTENT = "currentOrAboveLineContent"


@dataclass(frozen=True)
class Var:
    """A value derived from the request via a one-group regex filter."""
    name: str
    source: str
    filter: str

    def pattern(self) -> re.Pattern[str]:
        return re.compile(self.filter)


@dataclass(frozen=True)
class Rule:
    # field name -> regex; empty means catch-all
    match: Mapping[str, str]
    template: str
    vars: Tuple[Var, ...] = ()

    @property
    def specificity(self) -> int:
        return len(self.match)

    def is_catch_all(self) -> bool:
        return not self.match


@dataclass(frozen=True)
class ActionSet:
    name: str
    rules: Tuple[Rule, ...] = ()


@dataclass(frozen=True)
class Configuration:
    action_sets: Tuple[ActionSet, ...]

    def __post_init__(self) -> None:
        if not self.action_sets:
            raise ValueError("a configuration needs at least one action set")

    @property
    def initial(self) -> ActionSet:
        return self.action_sets[0]

    def by_index(self, index: int) -> Optional[ActionSet]:
        """1-based lookup, None when out of range."""
        if 1 <= index <= len(self.action_sets):
            return self.action_sets[index - 1]
        return None

    def by_name(self, name: str) -> Optional[ActionSet]:
        for action_set in self.action_sets:
            if action_set.name == name:
                return action_set
        return None


Fields = Dict[str, Any]


@dataclass(frozen=True)
class MatchRequest:
    """What the editor asked to test, e.g. {"filename": "a.py", "line": 12}."""
    fields: Fields = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.fields

    def __str__(self) -> str:
        if not self.fields:
            return "{}"
        inner = ", ".join(f"{k}: {v!r}" for k, v in self.fields.items())
        return "{" + inner + "}"
