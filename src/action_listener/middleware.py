"""Built-in middleware: the action listener stage and a logging stage.

A middleware is a pipeline stage with the shape
``(api) -> (next_dispatch) -> (action) -> result``.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any, Callable

from action_listener.actions import create_listener_actions
from action_listener.config import DEFAULT_NAMESPACE, ListenerOptions
from action_listener.errors import InvalidActionError
from action_listener.registry import Listener, SubscriptionRegistry, Unsubscribe
from action_listener.resolve import resolve_type

if TYPE_CHECKING:
    from action_listener.store import MiddlewareAPI

Dispatch = Callable[[Any], Any]
Middleware = Callable[["MiddlewareAPI"], Callable[[Dispatch], Dispatch]]


class ActionListenerMiddleware:
    """Pipeline stage that delivers actions to listeners registered at runtime.

    Listeners are added and removed either directly through
    :meth:`add_listener` / :meth:`remove_listener` or by dispatching the
    ``<namespace>/add`` and ``<namespace>/remove`` meta-actions through
    the store. Dispatching an add action returns the unsubscribe handle.

    Delivery walks a snapshot of the entries for the action's type taken
    when the action arrives. Before each call the entry is checked
    against the live registry, so removals made by earlier listeners (or
    by nested dispatches) are honoured within the same pass. Entries added
    during a pass are first delivered on the next dispatch.

    Listener exceptions are not caught: they abort the pass and reach
    the caller of ``dispatch``. A ``once`` listener that raises stays
    subscribed.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self.registry = SubscriptionRegistry()
        self.add_action, self.remove_action = create_listener_actions(namespace)

    def add_listener(
        self,
        type_or_source: Any,
        listener: Listener,
        options: ListenerOptions | Mapping[str, Any] | None = None,
    ) -> Unsubscribe:
        """Subscribe ``listener`` to an action type or typed action creator."""
        return self.registry.add(resolve_type(type_or_source), listener, options)

    def remove_listener(self, type_or_source: Any, listener: Listener) -> bool:
        """Unsubscribe ``listener``. Returns False if it was not subscribed."""
        return self.registry.remove(resolve_type(type_or_source), listener)

    def __call__(self, api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                return self._handle(api, next_dispatch, action)

            return dispatch

        return wrap

    def _handle(self, api: MiddlewareAPI, next_dispatch: Dispatch, action: Any) -> Any:
        if self.add_action.match(action):
            if not isinstance(action, MutableMapping):
                raise InvalidActionError(
                    f"{self.add_action.type} actions must be mutable mappings so meta can be removed",
                    action=action,
                )
            target, meta = self._read_meta(action)
            unsubscribe = self.add_listener(target, meta["listener"], meta.get("options"))
            # Listener and options must not reach later stages.
            del action["meta"]
            next_dispatch(action)
            return unsubscribe

        if self.remove_action.match(action):
            target, meta = self._read_meta(action)
            self.remove_listener(target, meta["listener"])

        if not isinstance(action, Mapping):
            return next_dispatch(action)

        action_type = action.get("type")
        snapshot = list(self.registry.entries_for(action_type))
        for entry in snapshot:
            if not self.registry.contains(action_type, entry):
                continue
            if not entry.should_run(action, api.get_state):
                continue
            if entry.once:
                # Dropped before the call so a nested dispatch of the
                # same type cannot deliver to it a second time.
                index = self.registry.index_of(action_type, entry)
                self.registry.discard(action_type, entry)
                try:
                    entry.listener(action, api)
                except BaseException:
                    self.registry.restore(action_type, index, entry)
                    raise
            else:
                entry.listener(action, api)
            if entry.prevent_propagation:
                return action

        return next_dispatch(action)

    @staticmethod
    def _read_meta(action: Mapping[str, Any]) -> tuple[Any, Mapping[str, Any]]:
        payload = action.get("payload")
        meta = action.get("meta")
        if not isinstance(payload, Mapping) or "type" not in payload:
            raise InvalidActionError(
                f"{action['type']} action needs a payload with the target 'type'", action=action
            )
        if not isinstance(meta, Mapping) or "listener" not in meta:
            raise InvalidActionError(
                f"{action['type']} action needs a meta mapping with a 'listener'", action=action
            )
        return payload["type"], meta

    def __repr__(self) -> str:
        return f"ActionListenerMiddleware(namespace={self.namespace!r})"


def create_action_listener_middleware(namespace: str = DEFAULT_NAMESPACE) -> ActionListenerMiddleware:
    """Create a listener middleware with its own empty registry."""
    return ActionListenerMiddleware(namespace)


def logging_middleware(
    logger: logging.Logger | None = None, level: int = logging.DEBUG
) -> Middleware:
    """Create middleware that logs each action and how long dispatch took."""
    log = logger or logging.getLogger("action_listener")

    def middleware(api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                if isinstance(action, Mapping):
                    action_type = action.get("type")
                else:
                    action_type = type(action).__name__
                log.log(level, "dispatch: type=%s", action_type)
                start = time.monotonic()
                result = next_dispatch(action)
                elapsed = time.monotonic() - start
                log.log(level, "dispatched: type=%s elapsed=%.4fs", action_type, elapsed)
                return result

            return dispatch

        return wrap

    return middleware
