from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from tertestrial.config.schema import ConfigFile
from tertestrial.errors import ConfigurationError
from tertestrial.rules.core import ActionSet, Configuration, Rule, Var

EXAMPLE_CONFIG = """{
  "actionSets": [
    {
      "name": "default",
      "actions": [
        {
          "match": {},
          "command": "echo test all files"
        },
        {
          "match": { "filename": "\\\\.py$" },
          "command": "echo testing file {{filename}}"
        },
        {
          "match": { "filename": "\\\\.py$", "line": "\\\\d+" },
          "command": "echo testing file {{filename}} at line {{line}}"
        },
        {
          "match": { "filename": "test_\\\\w+\\\\.py$", "line": "\\\\d+" },
          "command": "pytest {{filename}} -k {{testname}}",
          "vars": [
            {
              "name": "testname",
              "source": "currentOrAboveLineContent",
              "filter": "def (test_\\\\w+)"
            }
          ]
        }
      ]
    }
  ]
}
"""


def load_configuration(path: Path) -> Configuration:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(
            "Configuration file not found",
            f'Tertestrial requires a configuration file named "{path.name}" in the current directory. '
            'Please run "tertestrial setup" to create one.',
        ) from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot open configuration file: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Cannot parse configuration file: {exc}") from exc

    return parse_configuration(data)


def parse_configuration(data: object) -> Configuration:
    try:
        model = ConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration file: {exc}") from exc

    return Configuration(
        action_sets=tuple(
            ActionSet(
                name=action_set.name,
                rules=tuple(
                    Rule(
                        match=dict(action.match),
                        template=action.command,
                        vars=tuple(Var(name=v.name, source=v.source, filter=v.filter) for v in action.vars),
                    )
                    for action in action_set.actions
                ),
            )
            for action_set in model.action_sets
        )
    )


def create_example(path: Path) -> None:
    """Scaffold a configuration file. Never overwrites an existing one."""
    if path.exists():
        raise ConfigurationError(
            f"Configuration file {path} already exists",
            "Delete it first if you want to start over.",
        )
    try:
        path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot create configuration file: {exc}") from exc
