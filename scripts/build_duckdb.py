#!/usr/bin/env python3
"""Build DuckDB database from CSV exports.

Run this after exporting game day tables to CSV (one file per table:
game_days, teams, players, team_players, matches, match_stats).
The resulting .duckdb file is read by GameDayRepository.

Usage:
    python scripts/build_duckdb.py [csv_dir] [output_path]

Default csv_dir: data/sample (relative to repo root)
Default output_path: data/matchday.duckdb
"""
import sys
from pathlib import Path

import duckdb

from matchday.repositories.game_day_repository import REQUIRED_TABLES


def build_duckdb(data_path: Path, output_path: Path | None = None) -> Path:
    """Build DuckDB database from CSV files in data_path.

    Args:
        data_path: Directory containing CSV files
        output_path: Where to write the .duckdb file (default: data_path/matchday.duckdb)

    Returns:
        Path to the created database file
    """
    if output_path is None:
        output_path = data_path / "matchday.duckdb"

    # Remove old DB if exists
    if output_path.exists():
        output_path.unlink()
        print(f"Removed existing {output_path}")

    csv_files = sorted(data_path.glob("*.csv"))
    if not csv_files:
        print(f"Warning: No CSV files found in {data_path}")

    with duckdb.connect(str(output_path)) as conn:
        print(f"Building {output_path} from {len(csv_files)} CSV files...")

        for csv_file in csv_files:
            table_name = csv_file.stem.replace("-", "_")
            # all_varchar keeps ids as strings; the repository coerces counters
            conn.execute(f"""
                CREATE TABLE {table_name} AS
                SELECT * FROM read_csv('{csv_file}', header=true, all_varchar=true)
            """)
            row_count = conn.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]
            print(f"  ✓ {table_name}: {row_count:,} rows")

        tables = {row[0] for row in conn.execute("SHOW TABLES").fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]
        if missing:
            print(f"Warning: missing tables: {', '.join(missing)}")

        print(f"\nCreated {len(tables)} tables in {output_path}")

    return output_path


def main():
    repo_root = Path(__file__).parent.parent
    data_path = Path(sys.argv[1]) if len(sys.argv) > 1 else repo_root / "data" / "sample"
    output_path = Path(sys.argv[2]) if len(sys.argv) > 2 else repo_root / "data" / "matchday.duckdb"

    if not data_path.exists():
        print(f"Error: Data path not found: {data_path}")
        sys.exit(1)

    db_path = build_duckdb(data_path, output_path)
    print(f"\nDone! Database ready at: {db_path}")


if __name__ == "__main__":
    main()
