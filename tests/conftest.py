"""Shared fixtures: a synthetic game day exported to CSV and built into DuckDB."""

import csv
from pathlib import Path

import pytest

from build_duckdb import build_duckdb
from matchday.repositories.game_day_repository import GameDayRepository

GAME_DAY_ID = "gd:2026-10-17"

TABLES = {
    "game_days": [
        {"id": GAME_DAY_ID, "date": "2026-10-17", "status": "finished"},
        {"id": "gd:2026-10-24", "date": "2026-10-24", "status": "scheduled"},
    ],
    "teams": [
        {"id": "t:azul", "game_day_id": GAME_DAY_ID, "name": "Azul", "display_order": "1"},
        {"id": "t:branco", "game_day_id": GAME_DAY_ID, "name": "Branco", "display_order": "2"},
        {"id": "t:verde", "game_day_id": GAME_DAY_ID, "name": "Verde", "display_order": "3"},
        {"id": "t:solo", "game_day_id": GAME_DAY_ID, "name": "Solo", "display_order": "4"},
    ],
    "players": [
        {"id": "p:ana", "name": "Ana", "type": "mensalista", "primary_position": "ATA",
         "secondary_position": "MEI", "phone": "11987654321"},
        {"id": "p:bruno", "name": "Bruno", "type": "mensalista", "primary_position": "ZAG",
         "secondary_position": "", "phone": ""},
        {"id": "p:caio", "name": "Caio", "type": "avulso", "primary_position": "MEI",
         "secondary_position": "ATA", "phone": ""},
        {"id": "p:duda", "name": "Duda", "type": "avulso", "primary_position": "GOL",
         "secondary_position": "", "phone": ""},
        {"id": "p:edu", "name": "Edu", "type": "mensalista", "primary_position": "ATA",
         "secondary_position": "", "phone": ""},
    ],
    "team_players": [
        {"team_id": "t:azul", "player_id": "p:ana", "number": "9", "is_captain": "true"},
        {"team_id": "t:azul", "player_id": "p:bruno", "number": "4", "is_captain": "false"},
        {"team_id": "t:branco", "player_id": "p:caio", "number": "10", "is_captain": "true"},
        {"team_id": "t:branco", "player_id": "p:duda", "number": "1", "is_captain": "false"},
        {"team_id": "t:verde", "player_id": "p:edu", "number": "7", "is_captain": "true"},
    ],
    "matches": [
        {"id": "m:1", "game_day_id": GAME_DAY_ID, "team_a_id": "t:azul", "team_b_id": "t:branco",
         "score_a": "2", "score_b": "1", "status": "finished", "match_number": "1",
         "started_at": "2026-10-17T19:00:00", "finished_at": "2026-10-17T19:10:00"},
        {"id": "m:2", "game_day_id": GAME_DAY_ID, "team_a_id": "t:azul", "team_b_id": "t:verde",
         "score_a": "0", "score_b": "0", "status": "finished", "match_number": "2",
         "started_at": "2026-10-17T19:12:00", "finished_at": "2026-10-17T19:22:00"},
        {"id": "m:3", "game_day_id": GAME_DAY_ID, "team_a_id": "t:branco", "team_b_id": "t:verde",
         "score_a": "3", "score_b": "1", "status": "finished", "match_number": "3",
         "started_at": "2026-10-17T19:24:00", "finished_at": "2026-10-17T19:34:00"},
        {"id": "m:4", "game_day_id": GAME_DAY_ID, "team_a_id": "t:azul", "team_b_id": "t:branco",
         "score_a": "1", "score_b": "", "status": "in_progress", "match_number": "4",
         "started_at": "2026-10-17T19:36:00", "finished_at": ""},
        # Stale reference to a team that was deleted after the match finished
        {"id": "m:5", "game_day_id": GAME_DAY_ID, "team_a_id": "t:azul", "team_b_id": "t:gone",
         "score_a": "5", "score_b": "0", "status": "finished", "match_number": "5",
         "started_at": "", "finished_at": ""},
    ],
    "match_stats": [
        {"id": "s:1", "match_id": "m:1", "player_id": "p:ana", "goals": "2", "assists": "0",
         "yellow_cards": "0", "red_cards": "0"},
        {"id": "s:2", "match_id": "m:1", "player_id": "p:bruno", "goals": "0", "assists": "1",
         "yellow_cards": "1", "red_cards": "0"},
        {"id": "s:3", "match_id": "m:1", "player_id": "p:caio", "goals": "1", "assists": "",
         "yellow_cards": "", "red_cards": ""},
        {"id": "s:4", "match_id": "m:3", "player_id": "p:caio", "goals": "2", "assists": "1",
         "yellow_cards": "0", "red_cards": "0"},
        {"id": "s:5", "match_id": "m:3", "player_id": "p:duda", "goals": "0", "assists": "1",
         "yellow_cards": "0", "red_cards": "0"},
        {"id": "s:6", "match_id": "m:3", "player_id": "p:edu", "goals": "1", "assists": "0",
         "yellow_cards": "0", "red_cards": "0"},
        {"id": "s:7", "match_id": "m:4", "player_id": "p:ana", "goals": "1", "assists": "0",
         "yellow_cards": "0", "red_cards": "0"},
    ],
}


def write_csv_tables(data_path: Path, tables: dict[str, list[dict]]) -> None:
    for name, rows in tables.items():
        with open(data_path / f"{name}.csv", "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)


@pytest.fixture
def database_path(tmp_path):
    """DuckDB file holding the synthetic game day."""
    csv_dir = tmp_path / "csv"
    csv_dir.mkdir()
    write_csv_tables(csv_dir, TABLES)
    return build_duckdb(csv_dir, tmp_path / "matchday.duckdb")


@pytest.fixture
def repository(database_path):
    return GameDayRepository(database_path)


@pytest.fixture
def anyio_backend():
    return "asyncio"
