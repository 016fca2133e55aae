#!/usr/bin/env python3
"""
Tests for the SQLite storage of players and matches.

This test file focuses on:
- Schema creation
- Player name uniqueness
- Atomic match batches and day_id sequencing
- Import to ranking workflow
"""

import os
import shutil
import sqlite3
import tempfile
import unittest
from datetime import date, datetime, timezone

from database.database_manager import DatabaseManager
from database.player_manager import PlayerManager
from database.match_manager import MatchManager
from importer.import_validator import ImportValidator
from models.import_result import ImportStatus
from models.match import Match, Team
from models.player import Player
from ranking.ranking_processor import RankingProcessor


class TestDatabase(unittest.TestCase):
    """Test cases for DatabaseManager, PlayerManager and MatchManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.test_db_path = os.path.join(self.test_dir, "test_league.db")
        self.db = DatabaseManager(self.test_db_path, os.path.join(self.test_dir, "missing_config.yaml"))
        self.player_manager = PlayerManager(self.db)
        self.match_manager = MatchManager(self.db)

        self.ana = self.player_manager.add_player("Ana", dob=date(1980, 6, 15))
        self.bia = self.player_manager.add_player("Bia")
        self.caio = self.player_manager.add_player("Caio", avatar="https://example.org/caio.png")
        self.dan = self.player_manager.add_player("Dan", player_id="dan")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir)

    def _match(self, match_id, day, score_a=4, score_b=2, team_a=None, team_b=None):
        return Match(
            id=match_id,
            day_id=0,
            date=datetime(day.year, day.month, day.day, tzinfo=timezone.utc),
            team_a=Team(players=team_a or (self.ana.id, self.bia.id), score=score_a),
            team_b=Team(players=team_b or (self.caio.id, self.dan.id), score=score_b)
        )

    def test_database_initialization(self):
        """Test database initialization and table creation."""
        with sqlite3.connect(self.test_db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = [row[0] for row in cursor.fetchall()]
        self.assertIn('players', tables)
        self.assertIn('matches', tables)

    def test_default_config_fallback(self):
        """Test that a missing config file falls back to defaults."""
        self.assertEqual(self.db.config['import']['columns']['date'], 'Data')

    def test_players_round_trip(self):
        """Test that stored players are read back unchanged."""
        players = {p.name: p for p in self.player_manager.get_all_players()}

        self.assertEqual(list(players), ['Ana', 'Bia', 'Caio', 'Dan'])
        self.assertEqual(players['Ana'].dob, date(1980, 6, 15))
        self.assertIsNone(players['Bia'].dob)
        self.assertEqual(players['Caio'].avatar, "https://example.org/caio.png")
        self.assertEqual(players['Dan'].id, "dan")
        self.assertEqual(self.player_manager.get_player("dan"), players['Dan'])

    def test_duplicate_player_name_rejected(self):
        """Test that names are unique regardless of case and spacing."""
        with self.assertRaises(ValueError):
            self.player_manager.add_player(" ana ")
        with self.assertRaises(ValueError):
            self.player_manager.add_player("")
        self.assertEqual(len(self.player_manager.get_all_players()), 4)

    def test_accented_names_unique_regardless_of_case(self):
        """Test that names differing only in the case of accented letters clash."""
        alvaro = self.player_manager.add_player("Álvaro")

        with self.assertRaises(ValueError):
            self.player_manager.add_player("álvaro")
        with self.assertRaises(ValueError):
            self.player_manager.update_player(Player(id=self.bia.id, name="ÁLVARO"))

        self.assertEqual(self.player_manager.find_player_by_name("álvaro").id, alvaro.id)
        names = [p.name for p in self.player_manager.get_all_players()]
        self.assertEqual(names.count("Álvaro"), 1)
        self.assertNotIn("álvaro", names)

        # The unique index holds even when the check in Python is bypassed
        with self.assertRaises(sqlite3.IntegrityError):
            with sqlite3.connect(self.test_db_path) as conn:
                conn.execute("INSERT INTO players (id, name, name_key) VALUES (?, ?, ?)",
                             ("raw", "ÁLVARO", "álvaro"))

    def test_update_player(self):
        """Test renaming a player and the uniqueness check on update."""
        self.player_manager.update_player(Player(id=self.bia.id, name="Beatriz", dob=date(2001, 2, 3)))
        updated = self.player_manager.get_player(self.bia.id)
        self.assertEqual(updated.name, "Beatriz")
        self.assertEqual(updated.dob, date(2001, 2, 3))

        with self.assertRaises(ValueError):
            self.player_manager.update_player(Player(id=self.bia.id, name="CAIO"))
        with self.assertRaises(ValueError):
            self.player_manager.update_player(Player(id="missing", name="Nobody"))

    def test_find_and_delete_player(self):
        """Test lookup by name and deletion."""
        self.assertEqual(self.player_manager.find_player_by_name("  cAiO ").id, self.caio.id)
        self.assertIsNone(self.player_manager.find_player_by_name(""))

        self.assertTrue(self.player_manager.delete_player(self.caio.id))
        self.assertFalse(self.player_manager.delete_player(self.caio.id))
        self.assertIsNone(self.player_manager.find_player_by_name("Caio"))

    def test_day_ids_assigned_sequentially(self):
        """Test that each batch continues the day_id sequence."""
        first = self.match_manager.add_matches([
            self._match('m1', date(2024, 5, 10)),
            self._match('m2', date(2024, 5, 10), score_a=1, score_b=4),
        ])
        second = self.match_manager.add_matches([self._match('m3', date(2024, 5, 17))])

        self.assertEqual([m.day_id for m in first], [1, 2])
        self.assertEqual([m.day_id for m in second], [3])
        self.assertEqual(self.match_manager.get_next_day_id(), 4)

        stored = self.match_manager.get_all_matches()
        self.assertEqual([(m.id, m.day_id) for m in stored], [('m1', 1), ('m2', 2), ('m3', 3)])
        self.assertEqual(stored[0].date, datetime(2024, 5, 10, tzinfo=timezone.utc))
        self.assertEqual(stored[1].team_b.score, 4)

    def test_invalid_match_rejects_batch(self):
        """Test that one invalid match leaves the store untouched."""
        batch = [
            self._match('m1', date(2024, 5, 10)),
            self._match('m2', date(2024, 5, 10), score_a=3, score_b=3),
        ]
        with self.assertRaises(ValueError):
            self.match_manager.add_matches(batch)

        repeated = self._match('m3', date(2024, 5, 10), team_b=(self.ana.id, self.dan.id))
        with self.assertRaises(ValueError):
            self.match_manager.add_matches([repeated])

        self.assertEqual(self.match_manager.get_all_matches(), [])

    def test_duplicate_match_id_rolls_back(self):
        """Test that a storage error rolls back the whole batch."""
        self.match_manager.add_matches([self._match('m1', date(2024, 5, 10))])

        with self.assertRaises(sqlite3.IntegrityError):
            self.match_manager.add_matches([
                self._match('m2', date(2024, 5, 11)),
                self._match('m1', date(2024, 5, 11)),
            ])

        self.assertEqual([m.id for m in self.match_manager.get_all_matches()], ['m1'])

    def test_matches_on_date_and_delete(self):
        """Test per-day lookup and deletion."""
        self.match_manager.add_matches([
            self._match('m1', date(2024, 5, 10)),
            self._match('m2', date(2024, 5, 11)),
        ])

        self.assertEqual([m.id for m in self.match_manager.get_matches_on_date(date(2024, 5, 11))], ['m2'])
        self.assertTrue(self.match_manager.delete_match('m2'))
        self.assertEqual(self.match_manager.get_matches_on_date(date(2024, 5, 11)), [])
        self.assertEqual(self.db.get_database_stats(), {'players': 4, 'matches': 1, 'match_days': 1})

    def test_import_store_and_rank_workflow(self):
        """Test importing rows, storing them and ranking the new history."""
        rows = [
            {'Data': '10/05/2024', 'Jogador 1': 'Ana', 'Jogador 2': 'Bia', 'Dupla A': 4,
             'Dupla B': 2, 'Jogador 3': 'Caio', 'Jogador 4': 'Dan'},
            {'Data': '10/05/2024', 'Jogador 1': 'Ana', 'Jogador 2': 'Caio', 'Dupla A': 4,
             'Dupla B': 3, 'Jogador 3': 'Bia', 'Jogador 4': 'Dan'},
        ]
        validator = ImportValidator(self.db.config)

        result = validator.validate(rows, self.player_manager.get_all_players(),
                                    self.match_manager.get_all_matches(), today=date(2024, 6, 1))
        self.assertEqual(result.status, ImportStatus.READY)
        stored = self.match_manager.add_matches(result.matches)
        self.assertEqual([m.day_id for m in stored], [1, 2])

        # Importing the same day again is refused
        again = validator.validate(rows, self.player_manager.get_all_players(),
                                   self.match_manager.get_all_matches(), today=date(2024, 6, 1))
        self.assertEqual(again.status, ImportStatus.REJECTED)

        rankings = RankingProcessor(self.db.config).calculate_individual_rankings(
            self.match_manager.get_all_matches(), self.player_manager.get_all_players(), as_of=date(2024, 6, 1)
        )
        self.assertEqual(rankings[0].name, 'Ana')
        self.assertEqual(rankings[0].wins, 2)
        self.assertEqual(sum(r.matches_played for r in rankings), 8)


if __name__ == '__main__':
    unittest.main()
