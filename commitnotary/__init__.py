"""commitnotary: notarize pushed commits on an append-only ledger.

Each push anchors its commit ids (with repository, ref and timestamp) as a
signed ``System.remark``, chained to the previous successful anchor, and
every attempt is kept in an append-only JSON log.  Commits from failed
attempts are carried into the next one.
"""

__version__ = "0.1.0"

from commitnotary.core.pipeline import AnchorPipeline
from commitnotary.core.reconciler import compute_pending_commit_ids
from commitnotary.core.payload_builder import build_payload

__all__ = ["AnchorPipeline", "build_payload", "compute_pending_commit_ids", "__version__"]
