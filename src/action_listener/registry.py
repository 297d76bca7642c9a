"""Per-middleware registry of action listeners.

Each action type maps to an ordered list of :class:`ListenerEntry`
objects. Delivery order is subscription order. Entries are matched by
listener identity, so a listener is registered at most once per type.
Bound methods count as the same listener when they bind the same
function to the same object.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MethodType
from typing import TYPE_CHECKING, Any, Callable

from action_listener.config import Condition, ListenerOptions
from action_listener.errors import InvalidListenerError

if TYPE_CHECKING:
    from action_listener.store import MiddlewareAPI

Listener = Callable[[Mapping[str, Any], "MiddlewareAPI"], None]


@dataclass(eq=False)
class ListenerEntry:
    """A listener and its delivery options.

    Entries compare by identity: two entries wrapping the same listener
    are still distinct objects.
    """

    listener: Listener
    once: bool = False
    prevent_propagation: bool = False
    condition: Condition | None = None

    @classmethod
    def create(cls, listener: Listener, options: ListenerOptions) -> ListenerEntry:
        return cls(
            listener=listener,
            once=options.once,
            prevent_propagation=options.prevent_propagation,
            condition=options.condition,
        )

    def should_run(self, action: Mapping[str, Any], get_state: Callable[[], Any]) -> bool:
        return self.condition is None or bool(self.condition(action, get_state))


class Unsubscribe:
    """Handle that removes exactly one registry entry.

    Calling it more than once is a no-op. The return value reports
    whether this call removed the entry.
    """

    def __init__(self, registry: SubscriptionRegistry, action_type: str, entry: ListenerEntry) -> None:
        self._registry = registry
        self.action_type = action_type
        self.entry = entry

    def __call__(self) -> bool:
        return self._registry.discard(self.action_type, self.entry)

    @property
    def active(self) -> bool:
        """Whether the entry is still subscribed."""
        return self._registry.contains(self.action_type, self.entry)

    def __repr__(self) -> str:
        name = getattr(self.entry.listener, "__qualname__", repr(self.entry.listener))
        return f"Unsubscribe(action_type={self.action_type!r}, listener={name})"


class SubscriptionRegistry:
    """Maps action types to ordered listener entries."""

    def __init__(self) -> None:
        self._entries: dict[str, list[ListenerEntry]] = {}

    def add(
        self,
        action_type: str,
        listener: Listener,
        options: ListenerOptions | Mapping[str, Any] | None = None,
    ) -> Unsubscribe:
        """Subscribe ``listener`` to ``action_type``.

        If the listener is already subscribed to the type, the existing
        entry is kept (new options are ignored) and a handle for it is
        returned.
        """
        if not callable(listener):
            raise InvalidListenerError(
                f"Listener must be callable, got {type(listener).__name__}"
            )
        entries = self._entries.setdefault(action_type, [])
        entry = self._find(entries, listener)
        if entry is None:
            entry = ListenerEntry.create(listener, ListenerOptions.coerce(options))
            entries.append(entry)
        return Unsubscribe(self, action_type, entry)

    def remove(self, action_type: str, listener: Listener) -> bool:
        """Remove the entry for ``listener``. Returns False if none exists."""
        entries = self._entries.get(action_type)
        if entries is None:
            return False
        entry = self._find(entries, listener)
        if entry is None:
            return False
        entries.remove(entry)
        return True

    def discard(self, action_type: str, entry: ListenerEntry) -> bool:
        """Remove ``entry`` by identity. Returns False if already gone."""
        entries = self._entries.get(action_type, [])
        for index, candidate in enumerate(entries):
            if candidate is entry:
                del entries[index]
                return True
        return False

    def index_of(self, action_type: str, entry: ListenerEntry) -> int | None:
        for index, candidate in enumerate(self._entries.get(action_type, ())):
            if candidate is entry:
                return index
        return None

    def restore(self, action_type: str, index: int | None, entry: ListenerEntry) -> bool:
        """Put a discarded ``entry`` back at ``index``.

        Nothing happens if the entry, or another entry for the same
        listener, is already subscribed.
        """
        entries = self._entries.setdefault(action_type, [])
        if self.contains(action_type, entry) or self._find(entries, entry.listener) is not None:
            return False
        entries.insert(len(entries) if index is None else min(index, len(entries)), entry)
        return True

    def contains(self, action_type: str, entry: ListenerEntry) -> bool:
        return any(candidate is entry for candidate in self._entries.get(action_type, ()))

    def entries_for(self, action_type: str) -> Sequence[ListenerEntry]:
        """Return the live entry list for ``action_type`` (not a copy).

        An unknown type yields an empty sequence without creating a list.
        """
        return self._entries.get(action_type, ())

    def action_types(self) -> list[str]:
        """All types that have had a subscription, including emptied ones."""
        return list(self._entries)

    def count(self, action_type: str) -> int:
        return len(self._entries.get(action_type, ()))

    @staticmethod
    def _find(entries: Sequence[ListenerEntry], listener: Listener) -> ListenerEntry | None:
        for entry in entries:
            if entry.listener is listener:
                return entry
            if isinstance(listener, MethodType) and entry.listener == listener:
                return entry
        return None
