"""Business logic services."""

from matchday.services.match_service import (
    InvalidMatchUpdate,
    add_stat,
    create_match,
    remove_stat,
    update_score,
    update_status,
)
from matchday.services.standings_engine import (
    StandingsEngine,
    compute_standings,
    compute_top_assists,
    compute_top_scorers,
)

__all__ = [
    "InvalidMatchUpdate",
    "add_stat",
    "create_match",
    "remove_stat",
    "update_score",
    "update_status",
    "StandingsEngine",
    "compute_standings",
    "compute_top_assists",
    "compute_top_scorers",
]
