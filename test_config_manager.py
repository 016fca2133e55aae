#!/usr/bin/env python3
"""
Tests for configuration loading and the date helpers it feeds.
"""

import os
import shutil
import tempfile
import unittest
from datetime import date, datetime, timezone, timedelta

import yaml

from config.config_manager import ConfigManager
from utils.date_utils import DateUtils
from utils.name_utils import NameUtils
from models.player import Player


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir)

    def test_partial_config_merged_with_defaults(self):
        """Test that omitted keys keep their default values."""
        config_path = os.path.join(self.test_dir, "config.yaml")
        with open(config_path, 'w') as f:
            yaml.dump({
                'timezone': 'UTC',
                'scoring': {'win_rate_weight': 0.5},
                'import': {'columns': {'date': 'Date'}}
            }, f)

        config = ConfigManager.load_config(config_path)

        self.assertEqual(config['timezone'], 'UTC')
        self.assertEqual(config['scoring']['win_rate_weight'], 0.5)
        self.assertEqual(config['scoring']['games_won_rate_weight'], 0.15)
        self.assertEqual(config['import']['columns']['date'], 'Date')
        self.assertEqual(config['import']['columns']['player1'], 'Jogador 1')
        self.assertEqual(config['import']['header_rows'], 1)

    def test_missing_config_file(self):
        """Test fallback to default config when the file is missing."""
        config = ConfigManager.load_config(os.path.join(self.test_dir, "nonexistent.yaml"))
        self.assertEqual(config, ConfigManager.get_default_config())

    def test_invalid_yaml(self):
        """Test handling of invalid configuration files."""
        invalid_yaml_path = os.path.join(self.test_dir, "invalid.yaml")
        with open(invalid_yaml_path, 'w') as f:
            f.write("invalid: yaml: content: [")

        config = ConfigManager.load_config(invalid_yaml_path)
        self.assertEqual(config['pair_separator'], '-')

    def test_defaults_are_independent_copies(self):
        """Test that changing one default config does not leak into the next."""
        config = ConfigManager.get_default_config()
        config['scoring']['win_rate_weight'] = 0
        self.assertEqual(ConfigManager.get_default_config()['scoring']['win_rate_weight'], 0.7)


class TestDateAndNameUtils(unittest.TestCase):
    """Test cases for DateUtils and NameUtils."""

    def test_calculate_age(self):
        """Test whole-year ages around the birthday."""
        dob = date(1990, 6, 15)
        self.assertEqual(DateUtils.calculate_age(dob, date(2024, 6, 14)), 33)
        self.assertEqual(DateUtils.calculate_age(dob, date(2024, 6, 15)), 34)
        self.assertEqual(DateUtils.calculate_age(dob, date(2024, 12, 1)), 34)
        self.assertEqual(DateUtils.calculate_age(None, date(2024, 12, 1)), 0)

    def test_parse_date_day_first(self):
        """Test that slash dates are read day first."""
        self.assertEqual(DateUtils.parse_date("10/05/2024"), date(2024, 5, 10))
        self.assertEqual(DateUtils.parse_date("10/05/24"), date(2024, 5, 10))
        self.assertEqual(DateUtils.parse_date("2024-05-10T15:30:00"), date(2024, 5, 10))
        self.assertEqual(DateUtils.parse_date(datetime(2024, 5, 10, 8)), date(2024, 5, 10))
        self.assertIsNone(DateUtils.parse_date("31/02/2024"))
        self.assertIsNone(DateUtils.parse_date(""))
        self.assertIsNone(DateUtils.parse_date(45000))

    def test_utc_day(self):
        """Test UTC calendar days of aware and naive instants."""
        sao_paulo = timezone(timedelta(hours=-3))
        self.assertEqual(DateUtils.utc_day(datetime(2024, 5, 10, 22, 0, tzinfo=sao_paulo)), date(2024, 5, 11))
        self.assertEqual(DateUtils.utc_day(datetime(2024, 5, 10, 22, 0)), date(2024, 5, 10))
        self.assertEqual(DateUtils.to_utc_midnight(date(2024, 5, 10)).isoformat(), "2024-05-10T00:00:00+00:00")

    def test_name_index(self):
        """Test case-insensitive lookups."""
        index = NameUtils.build_name_index([Player(id='1', name='Ana Maria'), Player(id='2', name='Bia')])
        self.assertEqual(NameUtils.find_player("  ana   maria ", index).id, '1')
        self.assertEqual(NameUtils.find_player("BIA", index).id, '2')
        self.assertIsNone(NameUtils.find_player(None, index))
        accented = NameUtils.build_name_index([Player(id='3', name='Álvaro')])
        self.assertEqual(NameUtils.find_player('ÁLVARO', accented).id, '3')
        self.assertEqual(NameUtils.normalize_key('Álvaro'), NameUtils.normalize_key('álvaro'))
        self.assertIsNone(NameUtils.find_player(float('nan'), index))


if __name__ == '__main__':
    unittest.main()
