"""REST endpoints for game day standings and leaderboards."""

from enum import Enum
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from matchday.config import settings
from matchday.services.standings_engine import StandingsEngine

router = APIRouter(prefix="/api", tags=["standings"])


class LeaderboardMetric(str, Enum):
    """Player metrics that have a leaderboard."""

    GOALS = "goals"
    ASSISTS = "assists"


class GameDayInfo(BaseModel):
    """Brief game day information for listing."""

    id: str
    date: str | None
    status: str | None


class GameDayListResponse(BaseModel):
    """Response containing list of game days."""

    game_days: list[GameDayInfo]


class StandingEntry(BaseModel):
    """One ranked row of the standings table."""

    rank: int
    team_id: str
    team_name: str
    points: int
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_diff: int


class StandingsResponse(BaseModel):
    """Standings for a game day."""

    game_day_id: str
    standings: list[StandingEntry]


class LeaderboardEntry(BaseModel):
    """One ranked row of a player leaderboard."""

    rank: int
    player_id: str
    player_name: str
    primary_position: str | None
    secondary_position: str | None
    total: int


class LeaderboardResponse(BaseModel):
    """Scorer or assist leaderboard for a game day."""

    game_day_id: str
    metric: LeaderboardMetric
    total_players: int  # size of the full ranking before truncation
    players: list[LeaderboardEntry]


def _require_game_day(request: Request, game_day_id: str):
    repo = request.app.state.repository
    if repo.get_game_day(game_day_id) is None:
        raise HTTPException(404, f"Game day not found: {game_day_id}")
    return repo


@router.get("/game-days", response_model=GameDayListResponse)
def list_game_days(
    request: Request,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    """List recent game days."""
    repo = request.app.state.repository
    return GameDayListResponse(
        game_days=[GameDayInfo(**g) for g in repo.list_game_days(limit=limit)]
    )


@router.get("/game-days/{game_day_id}/standings", response_model=StandingsResponse)
def get_standings(request: Request, game_day_id: str):
    """League table for the finished matches of a game day."""
    repo = _require_game_day(request, game_day_id)
    teams, matches = repo.get_snapshot(game_day_id)
    rows = StandingsEngine.compute_standings(matches, teams)
    return StandingsResponse(
        game_day_id=game_day_id,
        standings=[
            StandingEntry(rank=i + 1, **row.to_dict()) for i, row in enumerate(rows)
        ],
    )


@router.get(
    "/game-days/{game_day_id}/leaderboards/{metric}",
    response_model=LeaderboardResponse,
)
def get_leaderboard(
    request: Request,
    game_day_id: str,
    metric: LeaderboardMetric,
    limit: Annotated[int | None, Query(ge=0)] = None,
):
    """Top scorers or assist leaders.

    ``limit`` caps the rows returned (defaults to the configured page size);
    ``limit=0`` returns the full ranking.
    """
    repo = _require_game_day(request, game_day_id)
    matches = repo.get_matches(game_day_id)
    rows = StandingsEngine.compute_leaderboard(matches, metric.value)

    if limit is None:
        limit = settings.leaderboard_page_size
    shown = rows[:limit] if limit else rows

    return LeaderboardResponse(
        game_day_id=game_day_id,
        metric=metric,
        total_players=len(rows),
        players=[
            LeaderboardEntry(rank=i + 1, **row.to_dict()) for i, row in enumerate(shown)
        ],
    )
