"""Unit tests for the CLI — Typer command registration and exit codes.

The ledger is replaced by patching the client factory used by ``anchor``.
"""

from __future__ import annotations

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from commitnotary.cli.app import app
from commitnotary.cli.commands import anchor as anchor_module
from commitnotary.cli.commands import log_cmds
from commitnotary.core.log_store import LogStore

runner = CliRunner()

_REQUIRED = ("LOG_FILENAME", "COMMIT_KEY_SECRET", "GITHUB_EVENT_PATH", "GITHUB_REF")


@pytest.fixture
def ci_env(monkeypatch, tmp_dir, log_path, write_event):
    """A CI-like environment with a push event of two commits."""
    event_path = write_event(["c1", "c2"])
    monkeypatch.chdir(tmp_dir)
    monkeypatch.setenv("LOG_FILENAME", str(log_path))
    monkeypatch.setenv("COMMIT_KEY_SECRET", "//Alice")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
    monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
    # wide enough that tables and panels never truncate
    monkeypatch.setattr(log_cmds, "console", Console(width=200))
    monkeypatch.setattr(anchor_module, "console", Console(width=200))
    return monkeypatch


def _use_client(monkeypatch, client):
    monkeypatch.setattr(anchor_module, "substrate_client_factory", lambda _config: client)


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("anchor", "pending", "history", "verify"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["anchor", "pending", "history", "verify"])
    def test_command_exists(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: anchor
# ---------------------------------------------------------------------------


class TestAnchorCommand:
    def test_success_exits_zero(self, ci_env, make_client, tx, log_path):
        _use_client(ci_env, make_client(tx.status("ready"), tx.best_block("0xabc"), tx.complete()))

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 0, result.output
        assert "best block" in result.output
        assert "0xabc" in result.output
        assert LogStore(log_path).read()[0].block == "0xabc"

    def test_failure_exits_one_after_recording(self, ci_env, make_client, tx, log_path):
        _use_client(ci_env, make_client(tx.error("Transaction invalid"), tx.complete()))

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 1
        assert "Anchoring failed" in result.output
        document = json.loads(log_path.read_text(encoding="utf-8"))
        assert document[0]["failed"] is True
        assert document[0]["payload"][3] == ["c1", "c2"]

    def test_indeterminate_exits_zero_without_entry(self, ci_env, make_client, tx, log_path):
        _use_client(ci_env, make_client(tx.status("ready"), tx.complete()))

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 0
        assert not log_path.exists()

    @pytest.mark.parametrize("missing", _REQUIRED)
    def test_missing_configuration_aborts(self, ci_env, make_client, tx, log_path, missing):
        client = make_client(tx.best_block("0xabc"))
        _use_client(ci_env, client)
        ci_env.delenv(missing)

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 2
        assert missing in result.output
        assert client.submitted == []
        assert not log_path.exists()

    def test_unreadable_event_exits_one_without_submitting(
        self, ci_env, make_client, tx, tmp_dir, log_path
    ):
        client = make_client(tx.best_block("0xabc"))
        _use_client(ci_env, client)
        ci_env.setenv("GITHUB_EVENT_PATH", str(tmp_dir / "absent.json"))

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 1
        assert "Cannot prepare anchor" in result.output
        assert client.submitted == []
        assert not log_path.exists()

    def test_event_without_repository_name_exits_one(
        self, ci_env, make_client, tx, write_event, log_path
    ):
        client = make_client(tx.best_block("0xabc"))
        _use_client(ci_env, client)
        write_event(["c1"], repo_name="")

        result = runner.invoke(app, ["anchor"])

        assert result.exit_code == 1
        assert "Cannot prepare anchor" in result.output
        assert client.submitted == []


# ---------------------------------------------------------------------------
# Test: read-only commands
# ---------------------------------------------------------------------------


class TestReadOnlyCommands:
    def test_pending_shows_retried_and_new_commits(self, ci_env, make_entry, log_path):
        LogStore(log_path).write([make_entry(["x"], block="0xhead"), make_entry(["a"])])

        result = runner.invoke(app, ["pending"])

        assert result.exit_code == 0, result.output
        for commit_id in ("a", "c1", "c2"):
            assert f"  {commit_id}" in result.output
        assert "0xhead" in result.output

    def test_pending_with_missing_event(self, ci_env, tmp_dir):
        result = runner.invoke(app, ["pending", "--event", str(tmp_dir / "absent.json")])
        assert result.exit_code == 1
        assert "Cannot read push event" in result.output

    def test_history_lists_entries(self, ci_env, make_entry, log_path):
        LogStore(log_path).write([make_entry(["x"], block="0x01"), make_entry(["a"])])

        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "FAILED" in result.output
        assert "inBlock" in result.output

    def test_history_empty_log(self, ci_env):
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "Log is empty" in result.output

    def test_verify_valid_chain(self, ci_env, make_entry, log_path):
        LogStore(log_path).write(
            [make_entry(["a"], block="0x01"), make_entry(["b"], block="0x02", previous_block="0x01")]
        )
        result = runner.invoke(app, ["verify"])
        assert result.exit_code == 0
        assert "Chain valid" in result.output

    def test_verify_broken_chain(self, ci_env, make_entry, log_path):
        LogStore(log_path).write(
            [make_entry(["a"], block="0x01"), make_entry(["b"], block="0x02", previous_block="0xbad")]
        )
        result = runner.invoke(app, ["verify"])
        assert result.exit_code == 1
        assert "BROKEN" in result.output
