"""Main Typer application — imports and registers all CLI commands.

Entry point: ``commitnotary`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from commitnotary.cli.commands.anchor import anchor_cmd
from commitnotary.cli.commands.log_cmds import history_cmd, pending_cmd, verify_cmd

app = typer.Typer(
    name="commitnotary",
    help="commitnotary: anchor pushed commits on a ledger and keep a chained audit log.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="anchor", help="Anchor the current push event (CI entry point).")(anchor_cmd)
app.command(name="pending", help="Show the payload the next anchor would submit.")(pending_cmd)
app.command(name="history", help="List recorded anchoring attempts.")(history_cmd)
app.command(name="verify", help="Verify the anchor chain recorded in the log.")(verify_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
