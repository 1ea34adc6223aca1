from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from tertestrial.dispatch.feedback import Feedback
from tertestrial.dispatch.launcher import Launcher
from tertestrial.dispatch.requests import (
    ActionSetSwitch,
    ByIndex,
    ByName,
    RepeatLast,
    Request,
    action_set_id,
    decode_request,
)
from tertestrial.errors import (
    NoMatchingRule,
    NoPreviousRun,
    TertestrialError,
    UnknownActionSet,
)
from tertestrial.rules.core import ActionSet, Configuration, MatchRequest
from tertestrial.rules.matcher import find_rule
from tertestrial.rules.template import resolve


@dataclass
class DispatcherState:
    active_action_set: ActionSet
    # last request that matched a rule; "repeat" re-evaluates it against the active set
    last_request: Optional[MatchRequest] = None


@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    command: Optional[str] = None
    error: Optional[str] = None


class Dispatcher:
    """
    Turns editor requests into shell commands and launches them.

    Requests must be handed in one at a time; the dispatcher does not lock
    its state. Launching does not wait for the command, so a new request
    can start another command while the previous one is still running.
    """

    def __init__(
        self,
        configuration: Configuration,
        launcher: Launcher,
        feedback: Optional[Feedback] = None,
        state: Optional[DispatcherState] = None,
        report_cb: Optional[Callable[[str, Dict[str, Any]], None]] = None,
    ) -> None:
        self.configuration = configuration
        self.launcher = launcher
        self.feedback = feedback or Feedback()
        self.state = state or DispatcherState(active_action_set=configuration.initial)
        self.report_cb = report_cb

    def handle_payload(self, payload: Any) -> DispatchResult:
        """Decode one JSON message from the editor and handle it."""
        try:
            request = decode_request(payload)
        except TertestrialError as exc:
            return self.report_error(exc)
        return self.handle(request)

    def report_error(self, exc: TertestrialError) -> DispatchResult:
        """Report a problem found before a request could be handled."""
        self.feedback.reset()
        return self._failed(exc)

    def handle(self, request: Request) -> DispatchResult:
        self.feedback.reset()
        try:
            if isinstance(request, ActionSetSwitch):
                self.switch_action_set(request.action_set_id)
                return DispatchResult(ok=True)
            if isinstance(request, RepeatLast):
                command = self._repeat_last()
            else:
                command = self._run(request)
        except TertestrialError as exc:
            return self._failed(exc)
        return DispatchResult(ok=True, command=command)

    def switch_action_set(self, identifier: Any) -> ActionSet:
        if not isinstance(identifier, (ByIndex, ByName)):
            identifier = action_set_id(identifier)

        if isinstance(identifier, ByIndex):
            found = self.configuration.by_index(identifier.index)
            index = identifier.index
        else:
            found = self.configuration.by_name(identifier.name)
            index = 0
        if found is None:
            raise UnknownActionSet(identifier)
        if not index:
            index = self.configuration.action_sets.index(found) + 1

        self.state.active_action_set = found
        self.feedback.switched(found.name, index)
        self._report("switch", action_set=found.name, index=index)
        return found

    def launch(self, command: str) -> None:
        self.feedback.command(command)
        try:
            self.launcher.launch(command)
        except OSError as exc:
            raise TertestrialError(f"cannot start command {command!r}: {exc}") from exc
        self._report("launch", command=command)

    # --- internals ---

    def _run(self, request: MatchRequest) -> str:
        rule = find_rule(self.state.active_action_set, request)
        if rule is None:
            raise NoMatchingRule(request)
        command = resolve(rule, request)
        self.launch(command)
        self.state.last_request = request
        return command

    def _repeat_last(self) -> str:
        last = self.state.last_request
        if last is None:
            raise NoPreviousRun()
        # rules come from the set active now, not the one active at the original run
        rule = find_rule(self.state.active_action_set, last)
        if rule is None:
            raise NoMatchingRule(last)
        command = resolve(rule, last)
        self.launch(command)
        return command

    def _failed(self, exc: TertestrialError) -> DispatchResult:
        self.feedback.error(exc)
        self._report("error", error=exc.message, kind=type(exc).__name__)
        return DispatchResult(ok=False, error=exc.message)

    def _report(self, event: str, **payload: Any) -> None:
        if self.report_cb:
            self.report_cb(event, payload)

    def snapshot(self) -> Dict[str, Any]:
        last = self.state.last_request
        return {
            "active_action_set": self.state.active_action_set.name,
            "action_sets": [s.name for s in self.configuration.action_sets],
            "last_request": dict(last.fields) if last is not None else None,
        }
