"""Error hierarchy for action_listener."""
from __future__ import annotations

from typing import Any


class ActionListenerError(Exception):
    """Base error for all action_listener errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TypeResolutionError(ActionListenerError):
    """A subscription target has no resolvable ``type`` string."""

    def __init__(self, target: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot resolve an action type from {target!r}: "
            "expected a string or an object with a string 'type' attribute",
            **kwargs,
        )
        self.target = target


class InvalidListenerError(ActionListenerError):
    """A listener or listener condition is not callable."""


class ActionCreationError(ActionListenerError):
    """An action creator's prepare callback returned a malformed result."""


class InvalidActionError(ActionListenerError):
    """A dispatched action is not a mapping with a string ``type``."""

    def __init__(self, message: str, *, action: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.action = action


class DispatchError(ActionListenerError):
    """Dispatch was attempted from a context that forbids it."""


class ConfigurationError(ActionListenerError):
    """The store or middleware chain is configured incorrectly."""
