"""Data models for game day bookkeeping."""

from matchday.models.match import (
    STAT_TYPES,
    Match,
    MatchStat,
    MatchStatus,
    PlayerSnapshot,
)
from matchday.models.standings import LeaderboardRow, StandingRow
from matchday.models.team import Team

__all__ = [
    "STAT_TYPES",
    "Match",
    "MatchStat",
    "MatchStatus",
    "PlayerSnapshot",
    "LeaderboardRow",
    "StandingRow",
    "Team",
]
