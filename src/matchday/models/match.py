"""Match and per-player match statistic models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MatchStatus(str, Enum):
    """Lifecycle of a match within a game day."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


# Counters a MatchStat row can track
STAT_TYPES = ("goals", "assists", "yellow_cards", "red_cards")


@dataclass
class PlayerSnapshot:
    """Player display fields denormalized onto a stat row."""

    id: str
    name: str
    primary_position: str | None = None
    secondary_position: str | None = None


@dataclass
class MatchStat:
    """A player's counters for a single match."""

    id: str
    player_id: str | None
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    player: PlayerSnapshot | None = None


@dataclass
class Match:
    """A match between two teams of the same game day."""

    id: str
    team_a_id: str
    team_b_id: str
    score_a: int = 0
    score_b: int = 0
    status: MatchStatus = MatchStatus.PENDING
    match_number: int = 0
    started_at: datetime | None = None
    finished_at: datetime | None = None
    stats: list[MatchStat] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED

    def stat_for(self, player_id: str) -> MatchStat | None:
        """Stat row for a player, if one was recorded."""
        for stat in self.stats:
            if stat is not None and stat.player_id == player_id:
                return stat
        return None
