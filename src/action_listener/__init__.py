"""Action listener middleware: runtime pub/sub over a store's dispatch chain."""
from __future__ import annotations

__version__ = "0.1.0"

# Actions
from action_listener.actions import (
    Action,
    ActionCreator,
    add_listener_action,
    create_action,
    create_listener_actions,
    remove_listener_action,
)

# Config
from action_listener.config import DEFAULT_NAMESPACE, ListenerOptions, StoreConfig

# Errors
from action_listener.errors import (
    ActionCreationError,
    ActionListenerError,
    ConfigurationError,
    DispatchError,
    InvalidActionError,
    InvalidListenerError,
    TypeResolutionError,
)

# Middleware
from action_listener.middleware import (
    ActionListenerMiddleware,
    Dispatch,
    Middleware,
    create_action_listener_middleware,
    logging_middleware,
)

# Registry
from action_listener.registry import ListenerEntry, SubscriptionRegistry, Unsubscribe
from action_listener.resolve import resolve_type

# Store
from action_listener.store import MiddlewareAPI, Store, apply_middleware, create_reducer

__all__ = [
    "__version__",
    "Action",
    "ActionCreator",
    "add_listener_action",
    "create_action",
    "create_listener_actions",
    "remove_listener_action",
    "DEFAULT_NAMESPACE",
    "ListenerOptions",
    "StoreConfig",
    "ActionCreationError",
    "ActionListenerError",
    "ConfigurationError",
    "DispatchError",
    "InvalidActionError",
    "InvalidListenerError",
    "TypeResolutionError",
    "ActionListenerMiddleware",
    "Dispatch",
    "Middleware",
    "create_action_listener_middleware",
    "logging_middleware",
    "ListenerEntry",
    "SubscriptionRegistry",
    "Unsubscribe",
    "resolve_type",
    "MiddlewareAPI",
    "Store",
    "apply_middleware",
    "create_reducer",
]
