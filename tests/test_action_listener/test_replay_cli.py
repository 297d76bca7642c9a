"""Tests for the action-listener CLI."""
from __future__ import annotations

import json

from click.testing import CliRunner

from action_listener import __version__
from action_listener.cli.main import cli


def _write_actions(tmp_path, actions) -> str:
    path = tmp_path / "actions.json"
    path.write_text(json.dumps(actions), encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_replay(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "replay" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# replay command
# ---------------------------------------------------------------------------


class TestReplayCommand:
    def test_counts_action_types(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a"}, {"type": "b"}, {"type": "a"}])

        result = CliRunner().invoke(cli, ["replay", path])

        assert result.exit_code == 0
        assert "Dispatched 3 actions" in result.output
        assert "a: 2" in result.output
        assert "b: 1" in result.output

    def test_json_output(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a"}, {"type": "a"}])

        result = CliRunner().invoke(cli, ["replay", path, "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"a": 2}

    def test_json_lines_input(self, tmp_path) -> None:
        path = tmp_path / "actions.jsonl"
        path.write_text('{"type": "a"}\n\n{"type": "b", "payload": 1}\n', encoding="utf-8")

        result = CliRunner().invoke(cli, ["replay", str(path), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"a": 1, "b": 1}

    def test_watch_echoes_payload(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a", "payload": {"n": 1}}, {"type": "a", "payload": {"n": 2}}])

        result = CliRunner().invoke(cli, ["replay", path, "--watch", "a"])

        assert result.exit_code == 0
        assert '[a] payload={"n": 1}' in result.output
        assert '[a] payload={"n": 2}' in result.output

    def test_watch_once(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a", "payload": 1}, {"type": "a", "payload": 2}])

        result = CliRunner().invoke(cli, ["replay", path, "--watch", "a", "--once"])

        assert result.exit_code == 0
        assert "[a] payload=1" in result.output
        assert "[a] payload=2" not in result.output

    def test_stop_keeps_watched_actions_from_reducer(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a"}, {"type": "b"}])

        result = CliRunner().invoke(cli, ["replay", path, "--watch", "a", "--stop"])

        assert result.exit_code == 0
        assert "a: " not in result.output
        assert "b: 1" in result.output

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        result = CliRunner().invoke(cli, ["replay", str(path)])

        assert result.exit_code == 1
        assert "Invalid actions file" in result.output

    def test_action_without_type(self, tmp_path) -> None:
        path = _write_actions(tmp_path, [{"type": "a"}, {"payload": 1}])

        result = CliRunner().invoke(cli, ["replay", path])

        assert result.exit_code == 1
        assert "action #1" in result.output

    def test_missing_file(self, tmp_path) -> None:
        result = CliRunner().invoke(cli, ["replay", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_meta_action_without_listener(self, tmp_path) -> None:
        path = _write_actions(
            tmp_path, [{"type": "a"}, {"type": "actionListenerMiddleware/add", "payload": {"type": "a"}}]
        )

        result = CliRunner().invoke(cli, ["replay", path])

        assert result.exit_code == 1
        assert "Cannot dispatch action #1" in result.output

    def test_meta_action_with_non_callable_listener(self, tmp_path) -> None:
        path = _write_actions(
            tmp_path,
            [{"type": "actionListenerMiddleware/add", "payload": {"type": "a"}, "meta": {"listener": "echo"}}],
        )

        result = CliRunner().invoke(cli, ["replay", path])

        assert result.exit_code == 1
        assert "Cannot dispatch action #0" in result.output
