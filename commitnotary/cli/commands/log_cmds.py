"""Read-only commands: ``pending``, ``history`` and ``verify``.

None of these touch the ledger or need the signing secret.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from commitnotary.core.chain import ChainIntegrityError, verify_chain
from commitnotary.core.log_store import LogStore
from commitnotary.core.payload_builder import build_payload, now_millis
from commitnotary.core.reconciler import compute_pending_commit_ids
from commitnotary.models.push_event import load_push_event
from commitnotary.monitor.renderer import LogRenderer

console = Console()

_LOG_OPTION = typer.Option(
    ...,
    "--log",
    "-l",
    envvar="LOG_FILENAME",
    help="Path to the JSON anchoring log.",
)


def pending_cmd(
    log_file: Path = _LOG_OPTION,
    event_file: Path = typer.Option(
        ...,
        "--event",
        "-e",
        envvar="GITHUB_EVENT_PATH",
        help="Path to the push event JSON document.",
    ),
    ref: str = typer.Option(
        ...,
        "--ref",
        "-r",
        envvar="GITHUB_REF",
        help="Ref (branch) being pushed.",
    ),
) -> None:
    """Show the payload the next anchor would submit, without submitting."""
    log = LogStore(log_file).read()
    try:
        event = load_push_event(event_file)
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Cannot read push event:[/bold red] {exc}")
        raise typer.Exit(code=1)

    pending = compute_pending_commit_ids(log, event.commit_ids)
    payload = build_payload(event.repository.name, ref, now_millis(), pending, log)
    LogRenderer(console=console).print_payload(payload)


def history_cmd(log_file: Path = _LOG_OPTION) -> None:
    """List every recorded anchoring attempt."""
    LogRenderer(console=console).print_history(LogStore(log_file).read())


def verify_cmd(log_file: Path = _LOG_OPTION) -> None:
    """Check that every successful anchor chains to the one before it."""
    renderer = LogRenderer(console=console)
    log = LogStore(log_file).read()
    try:
        verify_chain(log)
    except ChainIntegrityError as exc:
        renderer.print_chain_verification(str(log_file), False, str(exc))
        raise typer.Exit(code=1)
    renderer.print_chain_verification(str(log_file), True)
