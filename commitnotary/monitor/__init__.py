"""Rich terminal views over the anchoring log."""

from commitnotary.monitor.renderer import LogRenderer

__all__ = ["LogRenderer"]
