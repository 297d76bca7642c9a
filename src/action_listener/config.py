"""Configuration types."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from action_listener.errors import InvalidListenerError

DEFAULT_NAMESPACE = "actionListenerMiddleware"

Condition = Callable[[Mapping[str, Any], Callable[[], Any]], bool]


@dataclass(frozen=True)
class ListenerOptions:
    """Delivery options attached to a listener entry.

    ``prevent_propagation`` stops delivery to listeners registered after
    this one and keeps the action from reaching later pipeline stages.
    It has no effect when ``condition`` skips the listener.
    """

    once: bool = False
    prevent_propagation: bool = False
    condition: Condition | None = field(default=None, compare=False, hash=False)

    def __post_init__(self) -> None:
        if self.condition is not None and not callable(self.condition):
            raise InvalidListenerError(
                f"Listener condition must be callable, got {type(self.condition).__name__}"
            )

    @classmethod
    def coerce(cls, value: ListenerOptions | Mapping[str, Any] | None) -> ListenerOptions:
        """Build options from ``None``, an instance, or a wire-format mapping."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            prevent = value.get("preventPropagation", value.get("prevent_propagation", False))
            return cls(
                once=bool(value.get("once", False)),
                prevent_propagation=bool(prevent),
                condition=value.get("condition"),
            )
        raise InvalidListenerError(
            f"Listener options must be a mapping or ListenerOptions, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class StoreConfig:
    """Settings for the host :class:`~action_listener.store.Store`."""

    init_action_type: str = "@@action_listener/INIT"
    check_reducer_dispatch: bool = True
