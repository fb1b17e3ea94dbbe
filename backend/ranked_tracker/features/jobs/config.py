"""Explicit configuration of the ranked update service."""

from dataclasses import dataclass
from datetime import timedelta

from ranked_tracker.core.config import Settings

from .retry import RetryPolicy


@dataclass(frozen=True)
class UpdateConfig:
    """Parameters of one scheduler instance.

    Built once at the entry point and handed down; nothing in the update
    service reads global settings.
    """

    interval_seconds: float = 330.0
    skip_if_running: bool = True
    rate_limit_requests: int = 100
    rate_limit_window_factor: int = 2
    requests_per_player: int = 4
    request_delay_seconds: float = 1.0
    batch_cooldown_seconds: float = 120.0
    history_interval: timedelta = timedelta(hours=12)
    lp_event_dedup_window: timedelta = timedelta(hours=1)
    retry: RetryPolicy = RetryPolicy()

    @classmethod
    def from_settings(cls, settings: Settings) -> "UpdateConfig":
        return cls(
            interval_seconds=settings.update_interval_seconds,
            skip_if_running=settings.update_skip_if_running,
            rate_limit_requests=settings.riot_rate_limit_requests,
            rate_limit_window_factor=settings.riot_rate_limit_window_factor,
            requests_per_player=settings.riot_requests_per_player,
            request_delay_seconds=settings.update_request_delay_seconds,
            batch_cooldown_seconds=settings.update_batch_cooldown_seconds,
            history_interval=timedelta(hours=settings.history_interval_hours),
            lp_event_dedup_window=timedelta(minutes=settings.lp_event_dedup_minutes),
            retry=RetryPolicy(
                max_attempts=settings.retry_max_attempts,
                base_delay=settings.retry_base_delay_seconds,
                pre_delay=settings.retry_pre_delay_seconds,
            ),
        )
