"""Minimal host store that runs actions through a middleware chain."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from action_listener.config import StoreConfig
from action_listener.errors import ConfigurationError, DispatchError, InvalidActionError
from action_listener.middleware import Dispatch, Middleware
from action_listener.resolve import resolve_type

logger = logging.getLogger("action_listener.store")

Reducer = Callable[[Any, Mapping[str, Any]], Any]
CaseReducer = Callable[[Any, Mapping[str, Any]], Any]


class MiddlewareAPI:
    """What a middleware sees of the store: state access and dispatch."""

    def __init__(self, get_state: Callable[[], Any], dispatch: Dispatch) -> None:
        self._get_state = get_state
        self._dispatch = dispatch

    def get_state(self) -> Any:
        return self._get_state()

    def dispatch(self, action: Any) -> Any:
        return self._dispatch(action)


def apply_middleware(base_dispatch: Dispatch, api: MiddlewareAPI, *stages: Middleware) -> Dispatch:
    """Compose ``stages`` around ``base_dispatch``; the first stage runs first."""
    chain = base_dispatch
    for stage in reversed(stages):
        chain = stage(api)(chain)
    return chain


class Store:
    """Holds state produced by a reducer and dispatches actions to it.

    ``api.dispatch`` handed to middleware always goes through the whole
    chain, so a listener dispatching from inside a stage starts again at
    the first stage.
    """

    def __init__(
        self,
        reducer: Reducer,
        preloaded_state: Any = None,
        *,
        middleware: Sequence[Middleware] | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        self._reducer = reducer
        self._state = preloaded_state
        self._config = config or StoreConfig()
        self._listeners: list[Callable[[], None]] = []
        self._is_dispatching = False
        self._dispatch: Dispatch = self._dispatch_while_building

        api = MiddlewareAPI(self.get_state, lambda action: self._dispatch(action))
        self._dispatch = apply_middleware(self._base_dispatch, api, *(middleware or []))

        if preloaded_state is None:
            self.dispatch({"type": self._config.init_action_type})

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, action: Any) -> Any:
        """Send ``action`` through the middleware chain and return its result."""
        return self._dispatch(action)

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], bool]:
        """Call ``callback`` after every reducer run. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> bool:
            if callback in self._listeners:
                self._listeners.remove(callback)
                return True
            return False

        return unsubscribe

    def _dispatch_while_building(self, action: Any) -> Any:
        raise ConfigurationError(
            "Dispatching while constructing the middleware chain is not allowed"
        )

    def _base_dispatch(self, action: Any) -> Any:
        if not isinstance(action, Mapping):
            raise InvalidActionError(
                f"Actions must be mappings, got {type(action).__name__}", action=action
            )
        action_type = action.get("type")
        if not isinstance(action_type, str):
            raise InvalidActionError("Actions must have a string 'type'", action=action)
        if self._is_dispatching and self._config.check_reducer_dispatch:
            raise DispatchError("Reducers may not dispatch actions")

        logger.debug("Reducing action: type=%s", action_type)
        self._is_dispatching = True
        try:
            self._state = self._reducer(self._state, action)
        finally:
            self._is_dispatching = False

        for callback in list(self._listeners):
            callback()
        return action


def create_reducer(initial_state: Any, case_reducers: Mapping[Any, CaseReducer]) -> Reducer:
    """Build a reducer from a mapping of action type to case reducer.

    Keys may be type strings or typed action creators. Case reducers
    return the new state; unknown types leave the state unchanged.
    """
    handlers = {resolve_type(key): fn for key, fn in case_reducers.items()}

    def reducer(state: Any, action: Mapping[str, Any]) -> Any:
        if state is None:
            state = initial_state
        handler = handlers.get(action.get("type"))
        if handler is None:
            return state
        return handler(state, action)

    return reducer
