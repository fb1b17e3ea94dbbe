"""SQLAlchemy 2.0 ORM models for the players feature.

Rich Domain Model: the player row knows how to present its own ranked
snapshot and how to apply a reconciled one. History and LP-event rows are
append-only and go away with their player through ``ON DELETE CASCADE``.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime as SQLDateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ranked_tracker.core.models import Base

from .ranks import RankSnapshot


class PlayerORM(Base):
    """Tracked summoner account.

    Ranked snapshot fields are written by the update service only; owner
    metadata (``player_name``, ``role``, ``is_main``) by the owner-facing
    endpoints only.
    """

    __tablename__ = "players"
    __table_args__ = (
        Index("idx_players_player_name", "player_name"),
        Index("idx_players_tier_rank", "tier", "rank"),
    )

    # ========================================================================
    # IDENTITY
    # ========================================================================

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Stable surrogate key",
    )

    puuid: Mapped[str] = mapped_column(
        String(78),
        nullable=False,
        unique=True,
        index=True,
        comment="Player's universally unique identifier from Riot API",
    )

    summoner_name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Riot ID in gameName#tagLine format",
    )

    profile_icon_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Profile icon ID",
    )

    # ========================================================================
    # RANKED SNAPSHOT (solo queue)
    # ========================================================================

    tier: Mapped[Optional[str]] = mapped_column(
        String(16),
        nullable=True,
        comment="Rank tier, NULL when unranked",
    )

    rank: Mapped[Optional[str]] = mapped_column(
        String(4),
        nullable=True,
        comment="Rank division (I, II, III, IV)",
    )

    league_points: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="League points"
    )

    wins: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="Solo queue wins"
    )

    losses: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="Solo queue losses"
    )

    in_game: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the player was in an active game at last update",
    )

    # ========================================================================
    # OWNER METADATA
    # ========================================================================

    player_name: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        comment="Human owner of the account",
    )

    role: Mapped[Optional[str]] = mapped_column(
        String(16),
        nullable=True,
        comment="Preferred role",
    )

    is_main: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether this is the owner's main account",
    )

    # ========================================================================
    # BOOKKEEPING
    # ========================================================================

    last_update: Mapped[Optional[datetime]] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=True,
        comment="When the ranked snapshot was last reconciled",
    )

    created_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When this player record was first created",
    )

    # ========================================================================
    # RELATIONSHIPS
    # ========================================================================

    history: Mapped[list["PlayerHistoryORM"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    lp_events: Mapped[list["LPTrackerEventORM"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ========================================================================
    # RICH DOMAIN MODEL - Business Logic Methods
    # ========================================================================

    def snapshot(self) -> RankSnapshot:
        """Current stored ranked snapshot."""
        return RankSnapshot(
            tier=self.tier,
            rank=self.rank,
            league_points=self.league_points or 0,
            wins=self.wins or 0,
            losses=self.losses or 0,
        )

    @property
    def total_games(self) -> int:
        return (self.wins or 0) + (self.losses or 0)

    @property
    def win_rate(self) -> float:
        """Calculate win rate as a percentage.

        :returns: Win rate as percentage (0-100)
        """
        return self.snapshot().win_rate

    @property
    def display_rank(self) -> str:
        """Get human-readable rank (e.g., 'Gold II', 'Master', 'Unranked').

        :returns: Formatted rank string
        """
        if not self.tier:
            return "Unranked"
        if self.rank and self.tier not in ("MASTER", "GRANDMASTER", "CHALLENGER"):
            return f"{self.tier.title()} {self.rank}"
        return self.tier.title()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<PlayerORM(id={self.id}, "
            f"summoner_name='{self.summoner_name}', "
            f"rank='{self.display_rank}', "
            f"lp={self.league_points})>"
        )


class PlayerHistoryORM(Base):
    """Periodic ranked snapshot, sampled at most once per history window."""

    __tablename__ = "player_history"
    __table_args__ = (
        Index("idx_player_history_player_timestamp", "player_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
        comment="Reference to the player",
    )

    tier: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    rank: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)
    league_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    timestamp: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When the snapshot was taken",
    )

    player: Mapped["PlayerORM"] = relationship(back_populates="history")

    def __repr__(self) -> str:
        return (
            f"<PlayerHistoryORM(player_id={self.player_id}, "
            f"tier='{self.tier}', rank='{self.rank}', lp={self.league_points})>"
        )


class LPTrackerEventORM(Base):
    """Discrete rank change with its signed LP delta."""

    __tablename__ = "lp_tracker"
    __table_args__ = (
        Index("idx_lp_tracker_player_timestamp", "player_id", "timestamp"),
        Index("idx_lp_tracker_timestamp", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
        comment="Reference to the player",
    )

    summoner_name: Mapped[str] = mapped_column(String(128), nullable=False)

    previous_tier: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    previous_rank: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)
    previous_lp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tier: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    rank: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)
    current_lp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    difference: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Signed LP delta across division and tier boundaries",
    )

    timestamp: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    player: Mapped["PlayerORM"] = relationship(back_populates="lp_events")

    def __repr__(self) -> str:
        return (
            f"<LPTrackerEventORM(player_id={self.player_id}, "
            f"{self.previous_tier} {self.previous_rank} {self.previous_lp} -> "
            f"{self.tier} {self.rank} {self.current_lp}, diff={self.difference})>"
        )
