"""Normalize subscription targets into action type strings."""
from __future__ import annotations

from typing import Any

from action_listener.errors import TypeResolutionError


def resolve_type(target: Any) -> str:
    """Return the action type for a raw type string or a typed source.

    A typed source is any object exposing a string ``type`` attribute,
    such as an :class:`~action_listener.actions.ActionCreator`.
    """
    if isinstance(target, str):
        return target
    action_type = getattr(target, "type", None)
    if not isinstance(action_type, str):
        raise TypeResolutionError(target)
    return action_type
