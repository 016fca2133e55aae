"""
Core database management for the beach tennis league system.
"""

import sqlite3
import logging
from typing import Dict, Optional
from config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: Optional[str] = None, config_file: str = "config.yaml"):
        self.config = ConfigManager.load_config(config_file)
        self.db_path = db_path or self.config.get('database', {}).get('path', 'bt_league.db')
        self.init_database()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    name_key TEXT NOT NULL,
                    dob TEXT,
                    avatar TEXT NOT NULL DEFAULT '',
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            # Names double as the natural key for imports; name_key is
            # NameUtils.normalize_key(name), SQLite LOWER() only folds ASCII
            cursor.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_players_name_key
                ON players(name_key)
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS matches (
                    id TEXT PRIMARY KEY,
                    day_id INTEGER NOT NULL UNIQUE,
                    match_date TEXT NOT NULL,
                    team_a_player1 TEXT NOT NULL,
                    team_a_player2 TEXT NOT NULL,
                    team_a_score INTEGER NOT NULL,
                    team_b_player1 TEXT NOT NULL,
                    team_b_player2 TEXT NOT NULL,
                    team_b_score INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_matches_date ON matches(match_date)
            """)

            conn.commit()
            logger.info("Database initialized successfully")

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        return sqlite3.connect(self.db_path)

    def get_database_stats(self) -> Dict[str, int]:
        """Get basic database statistics."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT COUNT(*) FROM players")
            players = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM matches")
            matches = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(DISTINCT match_date) FROM matches")
            match_days = cursor.fetchone()[0]

            return {
                'players': players,
                'matches': matches,
                'match_days': match_days
            }
