"""
Tests for the periodic update scheduler.
"""

from unittest.mock import MagicMock

import pytest
from structlog import contextvars as structlog_contextvars

from ranked_tracker.features.jobs.config import UpdateConfig
from ranked_tracker.features.jobs.runner import RunSummary
from ranked_tracker.features.jobs.scheduler import (
    MAX_OVERLAPPING_RUNS,
    UPDATE_JOB_ID,
    UpdateScheduler,
)


@pytest.fixture
def mock_scheduler():
    scheduler = MagicMock()
    scheduler.running = False
    return scheduler


class TestSchedulerLifecycle:
    """Job registration and shutdown."""

    def test_start_registers_interval_job(self, mock_scheduler):
        update = UpdateScheduler(UpdateConfig(interval_seconds=330), MagicMock(), mock_scheduler)

        update.start()

        mock_scheduler.add_job.assert_called_once()
        kwargs = mock_scheduler.add_job.call_args.kwargs
        assert kwargs["trigger"] == "interval"
        assert kwargs["seconds"] == 330
        assert kwargs["id"] == UPDATE_JOB_ID
        assert kwargs["max_instances"] == 1
        assert kwargs["next_run_time"] is not None
        mock_scheduler.start.assert_called_once()

    def test_overlapping_runs_allowed_without_skip(self, mock_scheduler):
        config = UpdateConfig(skip_if_running=False)
        update = UpdateScheduler(config, MagicMock(), mock_scheduler)

        update.start()

        kwargs = mock_scheduler.add_job.call_args.kwargs
        assert kwargs["max_instances"] == MAX_OVERLAPPING_RUNS

    def test_start_twice_is_noop(self, mock_scheduler):
        mock_scheduler.running = True
        update = UpdateScheduler(UpdateConfig(), MagicMock(), mock_scheduler)

        update.start()

        mock_scheduler.add_job.assert_not_called()

    def test_shutdown(self, mock_scheduler):
        mock_scheduler.running = True
        update = UpdateScheduler(UpdateConfig(), MagicMock(), mock_scheduler)

        update.shutdown()

        mock_scheduler.shutdown.assert_called_once_with(wait=False)

    def test_shutdown_not_running(self, mock_scheduler):
        update = UpdateScheduler(UpdateConfig(), MagicMock(), mock_scheduler)

        update.shutdown()

        mock_scheduler.shutdown.assert_not_called()


class TestRunOnce:
    """A single tick of the update job."""

    async def test_run_once_binds_run_id(self, mock_scheduler):
        seen = {}

        async def run_update(run_id):
            seen["run_id"] = run_id
            seen["context"] = structlog_contextvars.get_contextvars().get("run_id")
            return RunSummary(run_id=run_id, total=2, succeeded=2)

        update = UpdateScheduler(UpdateConfig(), run_update, mock_scheduler)

        summary = await update.run_once()

        assert summary.run_id == seen["run_id"]
        assert seen["context"] == seen["run_id"]
        assert update.last_summary is summary
        assert "run_id" not in structlog_contextvars.get_contextvars()

    async def test_run_once_swallows_errors(self, mock_scheduler):
        async def run_update(run_id):
            raise ConnectionError("database down")

        update = UpdateScheduler(UpdateConfig(), run_update, mock_scheduler)

        assert await update.run_once() is None
        assert update.last_summary is None

    async def test_failed_run_keeps_previous_summary(self, mock_scheduler):
        calls = []

        async def run_update(run_id):
            calls.append(run_id)
            if len(calls) > 1:
                raise RuntimeError("boom")
            return RunSummary(run_id=run_id)

        update = UpdateScheduler(UpdateConfig(), run_update, mock_scheduler)

        first = await update.run_once()
        await update.run_once()

        assert update.last_summary is first
        assert calls[0] != calls[1]
