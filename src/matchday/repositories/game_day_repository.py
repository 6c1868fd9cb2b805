"""DuckDB-based data access for game day teams, matches and stats."""

import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

import duckdb
import pandas as pd

from matchday.models.match import Match, MatchStat, MatchStatus, PlayerSnapshot
from matchday.models.team import Team

logger = logging.getLogger(__name__)

# Tables exported from the game day store, one CSV each
REQUIRED_TABLES = ("game_days", "teams", "players", "team_players", "matches", "match_stats")


def _is_missing(value) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


def _to_int(value) -> int:
    """Coerce a VARCHAR counter to int; blanks and garbage count as zero."""
    if _is_missing(value):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric counter value {value!r}, using 0")
        return 0


def _to_str(value) -> str | None:
    if _is_missing(value):
        return None
    value = str(value).strip()
    return value or None


def _to_datetime(value) -> datetime | None:
    text = _to_str(value)
    if text is None:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Unparseable timestamp {text!r}, ignoring")
        return None


def _to_status(value) -> MatchStatus:
    text = _to_str(value)
    try:
        return MatchStatus(text)
    except ValueError:
        logger.warning(f"Unknown match status {text!r}, treating as pending")
        return MatchStatus.PENDING


class GameDayRepository:
    """Data access layer - DuckDB queries against a pre-built database file."""

    def __init__(self, database_path: str | Path):
        """Initialize with path to DuckDB database.

        Args:
            database_path: Path to matchday.duckdb file
                          (built from CSV exports by scripts/build_duckdb.py)

        Raises:
            FileNotFoundError: If the database file doesn't exist
            RuntimeError: If the database lacks one of REQUIRED_TABLES
        """
        self._db_path = Path(database_path)

        if not self._db_path.exists():
            raise FileNotFoundError(
                f"DuckDB database not found: {self._db_path}\n"
                f"Run: python scripts/build_duckdb.py <csv_dir>"
            )

        with self._connect() as conn:
            tables = {row[0] for row in conn.execute("SHOW TABLES").fetchall()}

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        if missing:
            raise RuntimeError(
                f"DuckDB database {self._db_path} is missing tables: {', '.join(missing)}\n"
                f"Re-export the CSVs and run: python scripts/build_duckdb.py <csv_dir>"
            )
        logger.info(f"GameDayRepository: Using {self._db_path} ({len(tables)} tables)")

    @contextmanager
    def _connect(self) -> Iterator[duckdb.DuckDBPyConnection]:
        # Read-only connection - no locks needed, thread-safe
        with duckdb.connect(str(self._db_path), read_only=True) as conn:
            yield conn

    def _query(
        self,
        sql: str,
        params: list | None = None,
        conn: duckdb.DuckDBPyConnection | None = None,
    ) -> list[dict]:
        """Execute query and return list of dicts."""
        if conn is None:
            with self._connect() as own_conn:
                df = own_conn.execute(sql, params or []).df()
        else:
            df = conn.execute(sql, params or []).df()
        return df.to_dict(orient="records")

    def list_game_days(self, limit: int = 50) -> list[dict]:
        """Get recent game days, newest first.

        Returns list of dicts with: id, date, status
        """
        rows = self._query(
            f"""
            SELECT id, "date", status
            FROM game_days
            ORDER BY "date" DESC, id
            LIMIT {int(limit)}
            """
        )
        return [
            {"id": _to_str(r["id"]), "date": _to_str(r["date"]), "status": _to_str(r["status"])}
            for r in rows
        ]

    def get_game_day(self, game_day_id: str) -> dict | None:
        """Get a game day by ID, or None if it doesn't exist."""
        rows = self._query(
            'SELECT id, "date", status FROM game_days WHERE id = ?',
            [game_day_id],
        )
        if not rows:
            return None
        r = rows[0]
        return {"id": _to_str(r["id"]), "date": _to_str(r["date"]), "status": _to_str(r["status"])}

    def get_teams(
        self, game_day_id: str, conn: duckdb.DuckDBPyConnection | None = None
    ) -> list[Team]:
        """Get the teams of a game day with their roster player ids.

        Ordered by display_order.
        """
        team_rows = self._query(
            """
            SELECT id, name
            FROM teams
            WHERE game_day_id = ?
            ORDER BY TRY_CAST(display_order AS INTEGER), id
            """,
            [game_day_id],
            conn,
        )
        roster_rows = self._query(
            """
            SELECT tp.team_id, tp.player_id
            FROM team_players tp
            JOIN teams t ON tp.team_id = t.id
            WHERE t.game_day_id = ?
            ORDER BY tp.team_id, tp.player_id
            """,
            [game_day_id],
            conn,
        )

        rosters: dict[str, list[str]] = {}
        for r in roster_rows:
            player_id = _to_str(r["player_id"])
            if player_id:
                rosters.setdefault(_to_str(r["team_id"]), []).append(player_id)

        return [
            Team(
                id=_to_str(r["id"]),
                name=_to_str(r["name"]) or "",
                player_ids=rosters.get(_to_str(r["id"]), []),
            )
            for r in team_rows
        ]

    def get_matches(
        self, game_day_id: str, conn: duckdb.DuckDBPyConnection | None = None
    ) -> list[Match]:
        """Get all matches of a game day with nested player stats.

        Ordered by match_number. Stat rows carry the player's display fields.
        """
        match_rows = self._query(
            """
            SELECT id, team_a_id, team_b_id, score_a, score_b, status,
                   match_number, started_at, finished_at
            FROM matches
            WHERE game_day_id = ?
            ORDER BY TRY_CAST(match_number AS INTEGER), id
            """,
            [game_day_id],
            conn,
        )
        stat_rows = self._query(
            """
            SELECT
                ms.id,
                ms.match_id,
                ms.player_id,
                ms.goals,
                ms.assists,
                ms.yellow_cards,
                ms.red_cards,
                p.id AS p_id,
                p.name AS player_name,
                p.primary_position,
                p.secondary_position
            FROM match_stats ms
            JOIN matches m ON ms.match_id = m.id
            LEFT JOIN players p ON ms.player_id = p.id
            WHERE m.game_day_id = ?
            ORDER BY ms.match_id, ms.id
            """,
            [game_day_id],
            conn,
        )

        stats_by_match: dict[str, list[MatchStat]] = {}
        for r in stat_rows:
            player = None
            if _to_str(r["p_id"]):
                player = PlayerSnapshot(
                    id=_to_str(r["p_id"]),
                    name=_to_str(r["player_name"]) or "",
                    primary_position=_to_str(r["primary_position"]),
                    secondary_position=_to_str(r["secondary_position"]),
                )
            stats_by_match.setdefault(_to_str(r["match_id"]), []).append(
                MatchStat(
                    id=_to_str(r["id"]),
                    player_id=_to_str(r["player_id"]),
                    goals=_to_int(r["goals"]),
                    assists=_to_int(r["assists"]),
                    yellow_cards=_to_int(r["yellow_cards"]),
                    red_cards=_to_int(r["red_cards"]),
                    player=player,
                )
            )

        return [
            Match(
                id=_to_str(r["id"]),
                team_a_id=_to_str(r["team_a_id"]),
                team_b_id=_to_str(r["team_b_id"]),
                score_a=_to_int(r["score_a"]),
                score_b=_to_int(r["score_b"]),
                status=_to_status(r["status"]),
                match_number=_to_int(r["match_number"]),
                started_at=_to_datetime(r["started_at"]),
                finished_at=_to_datetime(r["finished_at"]),
                stats=stats_by_match.get(_to_str(r["id"]), []),
            )
            for r in match_rows
        ]

    def get_snapshot(self, game_day_id: str) -> tuple[list[Team], list[Match]]:
        """Load teams and matches of a game day through one connection."""
        with self._connect() as conn:
            teams = self.get_teams(game_day_id, conn)
            matches = self.get_matches(game_day_id, conn)
        return teams, matches
