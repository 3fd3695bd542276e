"""Reconciliation, payload chaining and outcome recording."""
