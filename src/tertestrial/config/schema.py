from __future__ import annotations

import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"invalid regular expression {pattern!r}: {exc}") from exc


class VarModel(BaseModel):
    name: str
    source: str
    filter: str

    @field_validator("filter")
    @classmethod
    def one_capture_group(cls, value: str) -> str:
        groups = _compile(value).groups
        if groups != 1:
            raise ValueError(
                f"filters can only contain one capture group, {value!r} has {groups}"
            )
        return value


class ActionModel(BaseModel):
    match: Dict[str, str] = Field(default_factory=dict)
    command: str
    vars: List[VarModel] = Field(default_factory=list)

    @field_validator("match")
    @classmethod
    def valid_patterns(cls, value: Dict[str, str]) -> Dict[str, str]:
        for pattern in value.values():
            _compile(pattern)
        return value


class ActionSetModel(BaseModel):
    name: str
    actions: List[ActionModel] = Field(default_factory=list)


class ConfigFile(BaseModel):
    """Shape of .testconfig.json."""
    model_config = ConfigDict(populate_by_name=True)

    action_sets: List[ActionSetModel] = Field(alias="actionSets", min_length=1)
