"""Match bookkeeping: creation, scores, status changes and per-player stat counters.

Updates return a copy of the match; the match passed in is
left untouched so callers can keep comparing against their last snapshot.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable

from matchday.models.match import STAT_TYPES, Match, MatchStat, MatchStatus
from matchday.models.team import Team

logger = logging.getLogger(__name__)


class InvalidMatchUpdate(ValueError):
    """Raised when a score or stat update cannot be applied."""


def _validate_stat_type(stat_type: str) -> None:
    if stat_type not in STAT_TYPES:
        raise InvalidMatchUpdate(
            f"Unknown stat type: {stat_type} (expected one of {', '.join(STAT_TYPES)})"
        )


def _team_side(match: Match, player_id: str, teams: Iterable[Team]) -> str | None:
    """Return "a" or "b" for the team whose roster holds the player."""
    rosters = {team.id: team.player_ids for team in teams}
    if player_id in rosters.get(match.team_a_id, []):
        return "a"
    if player_id in rosters.get(match.team_b_id, []):
        return "b"
    return None


def team_goals_from_stats(match: Match, team: Team) -> int:
    """Sum of recorded goals for players on a team's roster."""
    roster = set(team.player_ids)
    return sum(
        (s.goals or 0) for s in match.stats if s is not None and s.player_id in roster
    )


def _sync_score(match: Match, player_id: str, teams: list[Team], delta: int) -> None:
    """Keep the scoreline consistent with goals recorded on stat rows.

    Adding a goal only raises the score when the stat total overtakes it,
    so goals entered without a scorer are kept. Removing a goal lowers the
    score to the stat total.
    """
    side = _team_side(match, player_id, teams)
    if side is None:
        logger.debug(f"Player {player_id} not on either roster of match {match.id}; score unchanged")
        return

    team_id = match.team_a_id if side == "a" else match.team_b_id
    team = next(t for t in teams if t.id == team_id)
    stats_goals = team_goals_from_stats(match, team)
    current = match.score_a if side == "a" else match.score_b

    if delta > 0 and stats_goals > current:
        new_score = stats_goals
    elif delta < 0:
        new_score = max(stats_goals, 0)
    else:
        return

    if side == "a":
        match.score_a = new_score
    else:
        match.score_b = new_score


def add_stat(match: Match, player_id: str, stat_type: str, teams: Iterable[Team] = ()) -> Match:
    """Increment a player's counter, creating their stat row if needed."""
    _validate_stat_type(stat_type)
    updated = copy.deepcopy(match)

    stat = updated.stat_for(player_id)
    if stat is None:
        stat = MatchStat(id=str(uuid.uuid4()), player_id=player_id)
        updated.stats.append(stat)
    setattr(stat, stat_type, (getattr(stat, stat_type) or 0) + 1)

    if stat_type == "goals":
        _sync_score(updated, player_id, list(teams), 1)
    return updated


def remove_stat(match: Match, player_id: str, stat_type: str, teams: Iterable[Team] = ()) -> Match:
    """Decrement a player's counter. No-op when there is nothing to remove."""
    _validate_stat_type(stat_type)
    existing = match.stat_for(player_id)
    if existing is None or (getattr(existing, stat_type) or 0) <= 0:
        return copy.deepcopy(match)

    updated = copy.deepcopy(match)
    stat = updated.stat_for(player_id)
    setattr(stat, stat_type, getattr(stat, stat_type) - 1)

    if stat_type == "goals":
        _sync_score(updated, player_id, list(teams), -1)
    return updated


def update_score(match: Match, score_a: int, score_b: int) -> Match:
    """Set the scoreline directly."""
    if score_a < 0 or score_b < 0:
        raise InvalidMatchUpdate(f"Scores must be non-negative, got {score_a}-{score_b}")
    updated = copy.deepcopy(match)
    updated.score_a = score_a
    updated.score_b = score_b
    return updated


def update_status(match: Match, status: MatchStatus | str, now: datetime | None = None) -> Match:
    """Move a match to a new status, stamping start/finish times."""
    try:
        status = MatchStatus(status)
    except ValueError as e:
        raise InvalidMatchUpdate(f"Unknown match status: {status}") from e

    now = now or datetime.now(timezone.utc)
    updated = copy.deepcopy(match)
    updated.status = status
    if status == MatchStatus.IN_PROGRESS:
        updated.started_at = now
    elif status == MatchStatus.FINISHED:
        updated.finished_at = now
    return updated


def create_match(matches: Iterable[Match], team_a_id: str, team_b_id: str) -> Match:
    """New pending 0-0 match, numbered after the game day's existing matches."""
    if team_a_id == team_b_id:
        raise InvalidMatchUpdate(f"A team cannot play itself: {team_a_id}")
    return Match(
        id=str(uuid.uuid4()),
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        match_number=len(list(matches)) + 1,
    )
