"""commitnotary CLI — Typer-based command-line interface.

Provides the ``commitnotary`` command: ``anchor`` for CI runs, plus
read-only ``pending``, ``history`` and ``verify`` for inspecting the log.

All output uses Rich for formatted terminal display.
"""
