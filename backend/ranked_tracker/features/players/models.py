"""Domain value objects exchanged between the gateway, the update service and
the repositories."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .ranks import RankSnapshot


@dataclass(frozen=True)
class ResolvedIdentity:
    """Player identity as reported by upstream.

    Fields stay optional because upstream occasionally answers with partial
    payloads; the update service validates before using them.
    """

    puuid: Optional[str]
    game_name: Optional[str]
    tag_line: Optional[str]
    profile_icon_id: Optional[int] = None

    @property
    def riot_id(self) -> str:
        """Display name in ``gameName#tagLine`` format."""
        return f"{self.game_name}#{self.tag_line}"


@dataclass(frozen=True)
class SnapshotUpdate:
    """Everything the update service writes onto a player row."""

    puuid: Optional[str]
    summoner_name: Optional[str]
    profile_icon_id: Optional[int]
    snapshot: RankSnapshot = field(default_factory=RankSnapshot)
    in_game: Optional[bool] = False
    last_update: Optional[datetime] = None


PLACEHOLDER_RIOT_ID = "undefined#undefined"


@dataclass(frozen=True)
class Validation:
    """Outcome of a boundary check."""

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def valid(cls) -> "Validation":
        return cls(ok=True)

    @classmethod
    def invalid(cls, reason: str) -> "Validation":
        return cls(ok=False, reason=reason)


def split_summoner_name(summoner_name: Optional[str]) -> Optional[tuple[str, str]]:
    """Split ``gameName#tagLine``; None when either part is missing."""
    if not summoner_name or "#" not in summoner_name:
        return None
    parts = summoner_name.split("#")
    game_name, tag_line = parts[0].strip(), parts[1].strip()
    if not game_name or not tag_line:
        return None
    return game_name, tag_line


def validate_identity(identity: Optional[ResolvedIdentity]) -> Validation:
    """Reject partial identities so they never overwrite good stored data."""
    if identity is None:
        return Validation.invalid("no identity returned")
    if not identity.puuid:
        return Validation.invalid("identity without puuid")
    if not identity.game_name or not identity.tag_line:
        return Validation.invalid("identity without game name or tag line")
    if identity.riot_id == PLACEHOLDER_RIOT_ID:
        return Validation.invalid("placeholder identity")
    return Validation.valid()
