"""Derived standings and leaderboard rows.

These are never persisted; they are rebuilt from the match history on
every computation.
"""

from dataclasses import asdict, dataclass


@dataclass
class StandingRow:
    """A team's aggregated record across finished matches."""

    team_id: str
    team_name: str
    points: int = 0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_diff: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LeaderboardRow:
    """A player's cumulative total for one metric (goals or assists)."""

    player_id: str
    player_name: str
    primary_position: str | None = None
    secondary_position: str | None = None
    total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
