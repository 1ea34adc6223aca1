from __future__ import annotations

import re
from typing import Iterable, List, Optional

from tertestrial.rules.core import ActionSet, MatchRequest, Rule


def matches(rule: Rule, request: MatchRequest) -> bool:
    """
    True if every field of the rule's match spec is present in the request
    and its value satisfies the pattern.

    A catch-all rule only applies to an empty request, so it never shadows
    requests for a specific file or line.
    """
    if rule.is_catch_all():
        return request.is_empty()
    for field_name, pattern in rule.match.items():
        if field_name not in request.fields:
            return False
        if not re.search(pattern, str(request.fields[field_name])):
            return False
    return True


def candidates(rules: Iterable[Rule], request: MatchRequest) -> List[Rule]:
    return [rule for rule in rules if matches(rule, request)]


def find_rule(action_set: ActionSet, request: MatchRequest) -> Optional[Rule]:
    """
    Best rule of the action set for this request, or None.

    Most match fields wins; among equally specific candidates the one
    declared last wins.
    """
    best: Optional[Rule] = None
    for rule in candidates(action_set.rules, request):
        # >= so later rules of equal specificity replace earlier ones
        if best is None or rule.specificity >= best.specificity:
            best = rule
    return best
