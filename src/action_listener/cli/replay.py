"""CLI command: action-listener replay -- dispatch recorded actions."""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click

from action_listener.config import ListenerOptions
from action_listener.errors import ActionListenerError
from action_listener.middleware import create_action_listener_middleware, logging_middleware
from action_listener.store import MiddlewareAPI, Store


def _load_actions(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array, a single JSON object, or JSON lines."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = [json.loads(line) for line in text.splitlines() if line.strip()]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("expected a JSON array, object or JSON lines")
    for index, action in enumerate(data):
        if not isinstance(action, dict) or not isinstance(action.get("type"), str):
            raise ValueError(f"action #{index} has no string 'type'")
    return data


def _count_reducer(state: dict[str, int], action: Mapping[str, Any]) -> dict[str, int]:
    counts = dict(state)
    counts[action["type"]] = counts.get(action["type"], 0) + 1
    return counts


def _echo_listener(action: Mapping[str, Any], api: MiddlewareAPI) -> None:
    payload = json.dumps(action.get("payload"), default=str)
    click.echo(f"[{action['type']}] payload={payload}")


@click.command()
@click.argument("actions_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--watch", multiple=True, help="Action type to echo (repeatable)")
@click.option("--once", is_flag=True, help="Echo each watched type only once")
@click.option("--stop", is_flag=True, help="Keep watched actions from reaching the reducer")
@click.option("--json", "as_json", is_flag=True, help="Print counts as JSON")
def replay(actions_file: str, watch: tuple[str, ...], once: bool, stop: bool, as_json: bool) -> None:
    """Dispatch every action in ACTIONS_FILE and report per-type counts."""
    try:
        actions = _load_actions(Path(actions_file))
    except (json.JSONDecodeError, ValueError) as exc:
        click.echo(f"Invalid actions file: {exc}", err=True)
        sys.exit(1)

    listeners = create_action_listener_middleware()
    store = Store(_count_reducer, {}, middleware=[logging_middleware(), listeners])

    options = ListenerOptions(once=once, prevent_propagation=stop)
    for action_type in watch:
        listeners.add_listener(action_type, _echo_listener, options)

    for index, action in enumerate(actions):
        try:
            store.dispatch(action)
        except ActionListenerError as exc:
            click.echo(f"Cannot dispatch action #{index}: {exc}", err=True)
            sys.exit(1)

    counts = store.get_state()
    if as_json:
        click.echo(json.dumps(counts, indent=2, sort_keys=True))
        return

    click.echo(f"Dispatched {len(actions)} actions")
    for action_type, count in sorted(counts.items()):
        click.echo(f"  {action_type}: {count}")
