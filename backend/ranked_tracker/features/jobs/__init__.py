"""Jobs feature - periodic ranked update service."""

from .config import UpdateConfig
from .retry import RetryPolicy, retry_with_backoff
from .router import router as jobs_router
from .reconciler import PlayerReconciler, ReconcileFailure, ReconcileSuccess
from .runner import RunSummary, UpdateRunner, compute_batch_size, partition_batches
from .scheduler import UpdateScheduler
from .service import build_reconciler, run_full_update, update_all_players

__all__ = [
    "UpdateConfig",
    "RetryPolicy",
    "retry_with_backoff",
    "jobs_router",
    "PlayerReconciler",
    "ReconcileFailure",
    "ReconcileSuccess",
    "RunSummary",
    "UpdateRunner",
    "compute_batch_size",
    "partition_batches",
    "UpdateScheduler",
    "build_reconciler",
    "run_full_update",
    "update_all_players",
]
