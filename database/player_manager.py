"""
Player management for the beach tennis league database.
"""

import sqlite3
import logging
import uuid
from datetime import date
from typing import List, Optional, Tuple

from models.player import Player
from utils.name_utils import NameUtils

logger = logging.getLogger(__name__)


class PlayerManager:
    """Manages roster operations. Player names are unique regardless of case."""

    def __init__(self, database_manager):
        self.db_manager = database_manager
        self.config = database_manager.config

    def add_player(self, name: str, dob: Optional[date] = None, avatar: str = "",
                   player_id: Optional[str] = None) -> Player:
        """
        Register a new player.
        Raises ValueError if the name is blank or already taken.
        """
        clean_name = NameUtils.clean_name(name)
        if not clean_name:
            raise ValueError("Player name cannot be empty")

        player = Player(id=player_id or uuid.uuid4().hex, name=clean_name, dob=dob, avatar=avatar or "")

        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            if self._name_taken(cursor, clean_name):
                raise ValueError(f"A player named '{clean_name}' already exists")

            cursor.execute("""
                INSERT INTO players (id, name, name_key, dob, avatar) VALUES (?, ?, ?, ?, ?)
            """, (player.id, player.name, NameUtils.normalize_key(clean_name),
                  dob.isoformat() if dob else None, player.avatar))
            conn.commit()

        logger.info(f"Added new player {player.name}")
        return player

    def update_player(self, player: Player) -> None:
        """Update name, date of birth and avatar of an existing player."""
        clean_name = NameUtils.clean_name(player.name)
        if not clean_name:
            raise ValueError("Player name cannot be empty")

        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            if self._name_taken(cursor, clean_name, exclude_id=player.id):
                raise ValueError(f"A player named '{clean_name}' already exists")

            cursor.execute("""
                UPDATE players SET name = ?, name_key = ?, dob = ?, avatar = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
            """, (clean_name, NameUtils.normalize_key(clean_name),
                  player.dob.isoformat() if player.dob else None, player.avatar or "", player.id))

            if cursor.rowcount == 0:
                raise ValueError(f"Player {player.id} not found")
            conn.commit()

        logger.info(f"Updated player {clean_name}")

    def delete_player(self, player_id: str) -> bool:
        """
        Remove a player from the roster.
        Recorded matches keep their ids; rankings simply ignore them.
        """
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM players WHERE id = ?", (player_id,))
            deleted = cursor.rowcount > 0
            conn.commit()

        if deleted:
            logger.info(f"Deleted player {player_id}")
        return deleted

    def _name_taken(self, cursor: sqlite3.Cursor, name: str, exclude_id: Optional[str] = None) -> bool:
        cursor.execute("""
            SELECT COUNT(*) FROM players
            WHERE name_key = ? AND id != ?
        """, (NameUtils.normalize_key(name), exclude_id or ""))
        return cursor.fetchone()[0] > 0

    def find_player_by_name(self, name: str) -> Optional[Player]:
        """Find a player by name, ignoring case and surrounding whitespace."""
        name_key = NameUtils.normalize_key(name)
        if not name_key:
            return None
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, dob, avatar FROM players
                WHERE name_key = ?
            """, (name_key,))
            row = cursor.fetchone()
            return self._row_to_player(row) if row else None

    def get_all_players(self) -> List[Player]:
        """Get all players from the database."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, dob, avatar FROM players
                ORDER BY name_key
            """)
            return [self._row_to_player(row) for row in cursor.fetchall()]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get a player by id."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, name, dob, avatar FROM players WHERE id = ?
            """, (player_id,))
            row = cursor.fetchone()
            return self._row_to_player(row) if row else None

    @staticmethod
    def _row_to_player(row: Tuple) -> Player:
        return Player(
            id=row[0],
            name=row[1],
            dob=date.fromisoformat(row[2]) if row[2] else None,
            avatar=row[3] or ""
        )
