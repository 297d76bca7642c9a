"""Typed action creators and the listener meta-actions."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from action_listener.config import DEFAULT_NAMESPACE
from action_listener.errors import ActionCreationError
from action_listener.resolve import resolve_type

Action = dict[str, Any]
PrepareFn = Callable[..., Mapping[str, Any]]


class ActionCreator:
    """Callable that builds actions of one fixed type.

    Without a ``prepare`` callback the first positional argument becomes
    the payload. With one, ``prepare`` returns a mapping holding
    ``payload`` and optionally ``meta`` and ``error``.
    """

    def __init__(self, action_type: str, prepare: PrepareFn | None = None) -> None:
        self.type = action_type
        self._prepare = prepare

    def __call__(self, *args: Any, **kwargs: Any) -> Action:
        if self._prepare is None:
            return {"type": self.type, "payload": args[0] if args else None}

        prepared = self._prepare(*args, **kwargs)
        if not isinstance(prepared, Mapping) or "payload" not in prepared:
            raise ActionCreationError(
                f"prepare callback for {self.type!r} must return a mapping with a 'payload' key"
            )
        action: Action = {"type": self.type, "payload": prepared["payload"]}
        for key in ("meta", "error"):
            if key in prepared:
                action[key] = prepared[key]
        return action

    def match(self, action: Any) -> bool:
        """Return True if ``action`` is an action of this creator's type."""
        return isinstance(action, Mapping) and action.get("type") == self.type

    def __str__(self) -> str:
        return self.type

    def __repr__(self) -> str:
        return f"ActionCreator({self.type!r})"


def create_action(action_type: str, prepare: PrepareFn | None = None) -> ActionCreator:
    """Create an action creator for ``action_type``."""
    return ActionCreator(action_type, prepare)


def create_listener_actions(namespace: str = DEFAULT_NAMESPACE) -> tuple[ActionCreator, ActionCreator]:
    """Build the add/remove listener meta-action creators for ``namespace``.

    The add action carries ``{"listener", "options"}`` in ``meta``; the
    remove action carries only ``{"listener"}``. Both put the resolved
    target type under ``payload["type"]``.
    """

    def prepare_add(type_or_creator: Any, listener: Callable, options: Any = None) -> dict[str, Any]:
        return {
            "payload": {"type": resolve_type(type_or_creator)},
            "meta": {"listener": listener, "options": options},
        }

    def prepare_remove(type_or_creator: Any, listener: Callable) -> dict[str, Any]:
        return {
            "payload": {"type": resolve_type(type_or_creator)},
            "meta": {"listener": listener},
        }

    return (
        create_action(f"{namespace}/add", prepare_add),
        create_action(f"{namespace}/remove", prepare_remove),
    )


add_listener_action, remove_listener_action = create_listener_actions()
