"""Pydantic schemas for the jobs feature."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RunSummaryResponse(BaseModel):
    """Counts of the last scheduled update run."""

    run_id: str
    total: int
    succeeded: int
    failed: int
    batches: int
    failed_players: list[str] = Field(default_factory=list)
    started_at: datetime
    finished_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UpdateSchedulerStatusResponse(BaseModel):
    """State of the periodic update service."""

    enabled: bool
    running: bool
    interval_seconds: Optional[float] = None
    last_run: Optional[RunSummaryResponse] = None
