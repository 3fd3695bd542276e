"""Rich terminal renderer for the anchoring log.

Color scheme
------------
- green : anchored (reached a best block)
- red   : failed attempt, commits pending retry
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from commitnotary.core.hasher import payload_digest
from commitnotary.models.log import LogEntry, TransactionPayload


def _short(ref: str | None, width: int = 12) -> str:
    if not ref:
        return "[dim]-[/dim]"
    return ref if len(ref) <= width else f"{ref[:width]}…"


def _timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


class LogRenderer:
    """Renders log entries and payloads as Rich output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_history(self, log: Sequence[LogEntry]) -> Table:
        table = Table(title="Anchoring Log", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Time (UTC)")
        table.add_column("Ref", style="cyan")
        table.add_column("Commits", justify="right")
        table.add_column("Previous", style="dim")
        table.add_column("Block")
        table.add_column("Result")

        for index, entry in enumerate(log):
            payload = entry.payload
            result = (
                f"[bold red]FAILED[/bold red] {entry.status}"
                if entry.failed
                else f"[green]{entry.status}[/green]"
            )
            table.add_row(
                str(index),
                _timestamp(payload.timestamp_ms),
                payload.ref,
                str(len(payload.commit_ids)),
                _short(payload.previous_block),
                _short(entry.block),
                result,
            )
        return table

    def render_payload(self, payload: TransactionPayload) -> Panel:
        lines = [
            f"[bold]Repository:[/bold] {payload.repo_name}",
            f"[bold]Ref:[/bold]        {payload.ref}",
            f"[bold]Timestamp:[/bold]  {_timestamp(payload.timestamp_ms)} ({payload.timestamp_ms})",
            f"[bold]Previous:[/bold]   {payload.previous_block or '[dim]none[/dim]'}",
            f"[bold]Digest:[/bold]     {payload_digest(payload)}",
            "",
            f"[bold]Commits ({len(payload.commit_ids)}):[/bold]",
            *[f"  {commit_id}" for commit_id in payload.commit_ids],
        ]
        return Panel("\n".join(lines), title="[bold]Pending Anchor[/bold]", border_style="cyan")

    def print_history(self, log: Sequence[LogEntry]) -> None:
        if not log:
            self.console.print("[dim]Log is empty.[/dim]")
            return
        self.console.print(self.render_history(log))

    def print_payload(self, payload: TransactionPayload) -> None:
        self.console.print(self.render_payload(payload))

    def print_chain_verification(self, path: str, valid: bool, detail: str = "") -> None:
        if valid:
            self.console.print(f"[bold green]Chain valid[/bold green] for {path}")
        else:
            self.console.print(f"[bold red]Chain BROKEN[/bold red] for {path}: {detail}")
