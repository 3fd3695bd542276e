"""``commitnotary anchor`` — anchor the current push event.

Reads everything from the environment (see ``commitnotary.config``), anchors
the pending commits, records the outcome in the log, and exits:

- 0 once the remark reached a best block (or the stream closed without a
  terminal status, which records nothing)
- 1 after a failed attempt has been recorded, or when the push event cannot
  be read or yields no payload
- 2 if required configuration is missing
"""

from __future__ import annotations

import typer
from rich.console import Console

from commitnotary.cli._logging import configure_logging
from commitnotary.config import ConfigurationMissing, load_config
from commitnotary.core.pipeline import AnchorPipeline, substrate_client_factory
from commitnotary.core.recorder import SubmissionFailed
from commitnotary.models.events import OutcomeKind

console = Console()


def anchor_cmd() -> None:
    """Anchor the pushed commits and append the outcome to the log."""
    try:
        config = load_config()
    except ConfigurationMissing as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=2)

    configure_logging(config.log_level)
    pipeline = AnchorPipeline(config, client_factory=substrate_client_factory)

    try:
        outcome = pipeline.run()
    except SubmissionFailed as exc:
        console.print(f"[bold red]Anchoring failed:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Cannot prepare anchor:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if outcome.kind == OutcomeKind.BEST_BLOCK:
        console.print("[bold green]Transaction is now in a best block:[/bold green]")
        console.print(config.explorer_link(outcome.block))
    else:
        console.print(
            "[yellow]Stream closed before the transaction reached a best block; "
            "nothing recorded.[/yellow]"
        )
