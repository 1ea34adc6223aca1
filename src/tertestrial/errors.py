from __future__ import annotations


class TertestrialError(Exception):
    """
    Base class for all problems reported to the operator.

    `message` says what went wrong, `guidance` (optional) says what to do about it.
    None of these are fatal for the dispatcher.
    """

    def __init__(self, message: str, guidance: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.guidance = guidance


class ConfigurationError(TertestrialError):
    pass


class RequestError(TertestrialError):
    pass


class UnsupportedActionSetIdType(RequestError):
    def __init__(self, value: object) -> None:
        super().__init__(f"unsupported action-set id type: {type(value).__name__}")
        self.value = value


class NoPreviousRun(TertestrialError):
    def __init__(self) -> None:
        super().__init__("no previous test run")


class NoMatchingRule(TertestrialError):
    def __init__(self, request: object) -> None:
        super().__init__(
            f"no matching action found for {request}",
            "Please make sure that this request is covered by the active action set",
        )


class UnknownActionSet(TertestrialError):
    def __init__(self, action_set_id: object) -> None:
        super().__init__(f"action set {action_set_id} does not exist")


class TemplateResolutionFailure(TertestrialError):
    pass
