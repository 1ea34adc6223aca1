from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from tertestrial.errors import RequestError, UnsupportedActionSetIdType
from tertestrial.rules.core import MatchRequest

REPEAT_LAST_TEST = "repeatLastTest"
CONTROL_KEYS = ("actionSet", "operation")


@dataclass(frozen=True)
class ByIndex:
    """1-based position within the configuration."""
    index: int

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True)
class ByName:
    name: str

    def __str__(self) -> str:
        return self.name


ActionSetId = Union[ByIndex, ByName]


@dataclass(frozen=True)
class ActionSetSwitch:
    action_set_id: ActionSetId


@dataclass(frozen=True)
class RepeatLast:
    pass


Request = Union[ActionSetSwitch, RepeatLast, MatchRequest]


def action_set_id(value: Any) -> ActionSetId:
    # bool is an int subclass but never a valid index
    if isinstance(value, bool):
        raise UnsupportedActionSetIdType(value)
    if isinstance(value, int):
        return ByIndex(value)
    if isinstance(value, str):
        return ByName(value)
    raise UnsupportedActionSetIdType(value)


def decode_request(payload: Any) -> Request:
    """
    Turn one decoded JSON message from the editor into a request variant.

    {"actionSet": 2} / {"actionSet": "unit"}  -> ActionSetSwitch
    {"operation": "repeatLastTest"}           -> RepeatLast
    anything else                             -> MatchRequest with those fields
    """
    if not isinstance(payload, Mapping):
        raise RequestError(f"a request must be a JSON object, got {type(payload).__name__}")

    control = [key for key in CONTROL_KEYS if key in payload]
    if not control:
        return MatchRequest(fields=dict(payload))

    if len(payload) > 1:
        raise RequestError(
            f"a control request cannot carry other fields: {dict(payload)}",
            'Send either {"actionSet": ...}, {"operation": "repeatLastTest"} or the fields to test.',
        )

    if "actionSet" in payload:
        return ActionSetSwitch(action_set_id(payload["actionSet"]))

    operation = payload["operation"]
    if operation == REPEAT_LAST_TEST:
        return RepeatLast()
    raise RequestError(f"unknown operation: {operation!r}")
