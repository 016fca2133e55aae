"""
Match management for the beach tennis league database.
"""

import sqlite3
import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, List, Tuple

from models.match import Match, Team, validate_match
from utils.date_utils import DateUtils

logger = logging.getLogger(__name__)


class MatchManager:
    """Manages match persistence and day_id sequencing."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def add_matches(self, matches: Iterable[Match]) -> List[Match]:
        """
        Persist a batch of matches atomically.

        day_id values are assigned here, continuing from the highest stored one,
        inside the same write transaction. Any invalid match rejects the batch.
        Returns the stored matches with their assigned day_id.
        """
        matches = list(matches)
        for match in matches:
            validate_match(match)
        if not matches:
            return []

        conn = sqlite3.connect(self.db_manager.db_path, isolation_level=None)
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            cursor.execute("SELECT COALESCE(MAX(day_id), 0) FROM matches")
            last_day_id = cursor.fetchone()[0]

            stored = []
            for offset, match in enumerate(matches, 1):
                stored_match = replace(
                    match,
                    day_id=last_day_id + offset,
                    date=DateUtils.to_utc_midnight(DateUtils.utc_day(match.date))
                )
                cursor.execute("""
                    INSERT INTO matches (
                        id, day_id, match_date,
                        team_a_player1, team_a_player2, team_a_score,
                        team_b_player1, team_b_player2, team_b_score
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    stored_match.id, stored_match.day_id, stored_match.date.isoformat(),
                    stored_match.team_a.players[0], stored_match.team_a.players[1], stored_match.team_a.score,
                    stored_match.team_b.players[0], stored_match.team_b.players[1], stored_match.team_b.score
                ))
                stored.append(stored_match)

            cursor.execute("COMMIT")
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

        logger.info(f"Stored {len(stored)} matches (day_id {stored[0].day_id}-{stored[-1].day_id})")
        return stored

    def get_next_day_id(self) -> int:
        """The day_id the next stored match would receive."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COALESCE(MAX(day_id), 0) FROM matches")
            return cursor.fetchone()[0] + 1

    def get_all_matches(self) -> List[Match]:
        """Get all matches ordered by date and day_id."""
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(self._select_sql() + " ORDER BY match_date, day_id")
            return [self._row_to_match(row) for row in cursor.fetchall()]

    def get_matches_on_date(self, match_day: date) -> List[Match]:
        """Get the matches recorded on a UTC calendar day."""
        start = DateUtils.to_utc_midnight(match_day)
        end = start + timedelta(days=1)
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(self._select_sql() + """
                WHERE match_date >= ? AND match_date < ?
                ORDER BY day_id
            """, (start.isoformat(), end.isoformat()))
            return [self._row_to_match(row) for row in cursor.fetchall()]

    def delete_match(self, match_id: str) -> bool:
        with sqlite3.connect(self.db_manager.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM matches WHERE id = ?", (match_id,))
            deleted = cursor.rowcount > 0
            conn.commit()

        if deleted:
            logger.info(f"Deleted match {match_id}")
        return deleted

    @staticmethod
    def _select_sql() -> str:
        return """
            SELECT id, day_id, match_date,
                   team_a_player1, team_a_player2, team_a_score,
                   team_b_player1, team_b_player2, team_b_score
            FROM matches
        """

    @staticmethod
    def _row_to_match(row: Tuple) -> Match:
        return Match(
            id=row[0],
            day_id=row[1],
            date=DateUtils.parse_instant(row[2]),
            team_a=Team(players=(row[3], row[4]), score=row[5]),
            team_b=Team(players=(row[6], row[7]), score=row[8])
        )
