"""League standings and player leaderboards derived from a match history.

Everything here is pure: no I/O, no cached state, inputs are never mutated.
Incomplete data is tolerated by omission rather than by raising:

- finished matches that reference a team outside ``teams`` are skipped
- stat rows without a player reference are skipped
- missing counters count as zero
"""

import logging
from typing import Iterable

from matchday.models.match import Match
from matchday.models.standings import LeaderboardRow, StandingRow
from matchday.models.team import Team

logger = logging.getLogger(__name__)

POINTS_WIN = 3
POINTS_DRAW = 1
UNKNOWN_PLAYER_NAME = "Unknown player"
LEADERBOARD_METRICS = ("goals", "assists")


class StandingsEngine:
    """Derives ranked standings and leaderboards from finished matches."""

    @staticmethod
    def compute_standings(matches: Iterable[Match], teams: Iterable[Team]) -> list[StandingRow]:
        """Rank teams by points, then goal difference, then goals scored.

        Teams without a finished match are left out. Remaining ties are
        broken by team id so the order never depends on input order.
        """
        table = {team.id: StandingRow(team_id=team.id, team_name=team.name) for team in teams}
        if not table:
            return []

        for match in matches or []:
            if not match.is_finished:
                continue

            row_a = table.get(match.team_a_id)
            row_b = table.get(match.team_b_id)
            if row_a is None or row_b is None:
                logger.debug(f"Skipping match {match.id}: unknown team reference")
                continue

            score_a = match.score_a or 0
            score_b = match.score_b or 0

            row_a.played += 1
            row_b.played += 1
            row_a.goals_for += score_a
            row_a.goals_against += score_b
            row_b.goals_for += score_b
            row_b.goals_against += score_a

            if score_a > score_b:
                row_a.wins += 1
                row_a.points += POINTS_WIN
                row_b.losses += 1
            elif score_a < score_b:
                row_b.wins += 1
                row_b.points += POINTS_WIN
                row_a.losses += 1
            else:
                row_a.draws += 1
                row_a.points += POINTS_DRAW
                row_b.draws += 1
                row_b.points += POINTS_DRAW

        played = []
        for row in table.values():
            row.goal_diff = row.goals_for - row.goals_against
            if row.played > 0:
                played.append(row)

        return sorted(
            played,
            key=lambda r: (-r.points, -r.goal_diff, -r.goals_for, r.team_id),
        )

    @staticmethod
    def compute_leaderboard(matches: Iterable[Match], metric: str) -> list[LeaderboardRow]:
        """Rank players by their cumulative ``metric`` over finished matches.

        Args:
            matches: Match history, any statuses mixed
            metric: "goals" or "assists"

        Returns:
            Players with a non-zero total, highest first. Equal totals are
            ordered by display name, then player id.
        """
        if metric not in LEADERBOARD_METRICS:
            raise ValueError(f"Unknown leaderboard metric: {metric}")

        totals: dict[str, LeaderboardRow] = {}
        for match in matches or []:
            if not match.is_finished:
                continue
            for stat in match.stats or []:
                if stat is None or stat.player_id is None:
                    continue

                row = totals.get(stat.player_id)
                if row is None:
                    # First snapshot seen wins; later ones are not reconciled
                    snapshot = stat.player
                    row = LeaderboardRow(
                        player_id=stat.player_id,
                        player_name=snapshot.name if snapshot and snapshot.name else UNKNOWN_PLAYER_NAME,
                        primary_position=snapshot.primary_position if snapshot else None,
                        secondary_position=snapshot.secondary_position if snapshot else None,
                    )
                    totals[stat.player_id] = row
                row.total += getattr(stat, metric) or 0

        ranked = [row for row in totals.values() if row.total > 0]
        return sorted(ranked, key=lambda r: (-r.total, r.player_name, r.player_id))

    @classmethod
    def compute_top_scorers(cls, matches: Iterable[Match]) -> list[LeaderboardRow]:
        """Goal leaderboard."""
        return cls.compute_leaderboard(matches, "goals")

    @classmethod
    def compute_top_assists(cls, matches: Iterable[Match]) -> list[LeaderboardRow]:
        """Assist leaderboard."""
        return cls.compute_leaderboard(matches, "assists")


compute_standings = StandingsEngine.compute_standings
compute_top_scorers = StandingsEngine.compute_top_scorers
compute_top_assists = StandingsEngine.compute_top_assists
