"""Periodic driver of the ranked update service.

``UpdateScheduler`` owns one APScheduler interval job. The job fires as soon
as the scheduler starts and then every ``interval_seconds``. A failing run is
logged and never cancels the next one.

With ``skip_if_running`` a tick that arrives while the previous run is still
busy is skipped (APScheduler ``max_instances=1``); without it runs may
overlap.
"""

import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

import structlog
from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from structlog import contextvars as structlog_contextvars

from .config import UpdateConfig
from .runner import RunSummary

logger = structlog.get_logger(__name__)

UPDATE_JOB_ID = "ranked_update"
MAX_OVERLAPPING_RUNS = 10

RunUpdate = Callable[[str], Awaitable[RunSummary]]


class UpdateScheduler:
    """Runs ``run_update`` on a fixed interval for the lifetime of the process."""

    def __init__(
        self,
        config: UpdateConfig,
        run_update: RunUpdate,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        """
        :param config: Interval and overlap policy
        :param run_update: Coroutine function performing one run, given a run id
        :param scheduler: APScheduler instance (a fresh one when omitted)
        """
        self.config = config
        self._run_update = run_update
        self._scheduler = scheduler or AsyncIOScheduler(
            executors={"default": AsyncIOExecutor()},
            job_defaults={
                "coalesce": True,  # Combine multiple missed runs into one
                "misfire_grace_time": 60,
            },
            timezone="UTC",
        )
        self.last_summary: Optional[RunSummary] = None

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        """Schedule the update job (first run immediately) and start the scheduler."""
        if self.running:
            logger.warning("Update scheduler already running")
            return

        self._scheduler.add_job(
            self.run_once,
            trigger="interval",
            seconds=self.config.interval_seconds,
            id=UPDATE_JOB_ID,
            name="Ranked update",
            next_run_time=datetime.now(timezone.utc),
            max_instances=1 if self.config.skip_if_running else MAX_OVERLAPPING_RUNS,
            replace_existing=True,
        )
        self._scheduler.start()

        logger.info(
            "Update scheduler started",
            interval_seconds=self.config.interval_seconds,
            skip_if_running=self.config.skip_if_running,
        )

    def shutdown(self, wait: bool = False) -> None:
        """Stop the scheduler; a run in flight is not awaited unless ``wait``."""
        if not self.running:
            logger.info("Update scheduler is not running, nothing to shutdown")
            return

        self._scheduler.shutdown(wait=wait)
        logger.info("Update scheduler shut down")

    async def run_once(self) -> Optional[RunSummary]:
        """
        Perform one update run with a fresh ``run_id`` bound to every log line.

        Run-level errors are logged and swallowed so the schedule survives.

        :returns: Summary of the run, None when it failed
        """
        run_id = uuid.uuid4().hex
        structlog_contextvars.bind_contextvars(run_id=run_id)
        try:
            summary = await self._run_update(run_id)
        except Exception as e:
            logger.error(
                "Update run failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return None
        else:
            self.last_summary = summary
            return summary
        finally:
            structlog_contextvars.unbind_contextvars("run_id")
