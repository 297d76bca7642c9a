"""Tests for action_listener.config."""
from __future__ import annotations

import dataclasses

import pytest

from action_listener.config import DEFAULT_NAMESPACE, ListenerOptions, StoreConfig
from action_listener.errors import InvalidListenerError


def _always(action, get_state) -> bool:
    return True


class TestListenerOptions:
    def test_defaults(self) -> None:
        opts = ListenerOptions()
        assert opts.once is False
        assert opts.prevent_propagation is False
        assert opts.condition is None

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ListenerOptions().once = True  # type: ignore[misc]

    def test_non_callable_condition_rejected(self) -> None:
        with pytest.raises(InvalidListenerError):
            ListenerOptions(condition="yes")  # type: ignore[arg-type]

    def test_equality_ignores_condition(self) -> None:
        assert ListenerOptions(once=True, condition=_always) == ListenerOptions(once=True)


class TestCoerce:
    def test_none(self) -> None:
        assert ListenerOptions.coerce(None) == ListenerOptions()

    def test_instance_returned_as_is(self) -> None:
        opts = ListenerOptions(once=True)
        assert ListenerOptions.coerce(opts) is opts

    def test_wire_mapping(self) -> None:
        opts = ListenerOptions.coerce(
            {"once": True, "preventPropagation": True, "condition": _always}
        )
        assert opts.once is True
        assert opts.prevent_propagation is True
        assert opts.condition is _always

    def test_snake_case_mapping(self) -> None:
        assert ListenerOptions.coerce({"prevent_propagation": 1}).prevent_propagation is True

    def test_empty_mapping(self) -> None:
        assert ListenerOptions.coerce({}) == ListenerOptions()

    def test_rejects_other_types(self) -> None:
        with pytest.raises(InvalidListenerError):
            ListenerOptions.coerce(["once"])  # type: ignore[arg-type]


class TestStoreConfig:
    def test_defaults(self) -> None:
        cfg = StoreConfig()
        assert cfg.init_action_type == "@@action_listener/INIT"
        assert cfg.check_reducer_dispatch is True

    def test_default_namespace(self) -> None:
        assert DEFAULT_NAMESPACE == "actionListenerMiddleware"
