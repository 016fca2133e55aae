"""
Configuration management for the beach tennis league system.
"""

import copy
import logging
import yaml
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: Optional[str]) -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults."""
        if not config_file:
            return ConfigManager.get_default_config()
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return ConfigManager.get_default_config()
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return ConfigManager.get_default_config()

        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' is not a mapping. Using default configuration.")
            return ConfigManager.get_default_config()

        return ConfigManager.merge_with_defaults(loaded)

    @staticmethod
    def merge_with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay a (possibly partial) config on the defaults, one section deep."""
        merged = ConfigManager.get_default_config()
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                section = merged[key]
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict) and isinstance(section.get(sub_key), dict):
                        section[sub_key] = {**section[sub_key], **sub_value}
                    else:
                        section[sub_key] = sub_value
            else:
                merged[key] = value
        return merged

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return copy.deepcopy({
            'timezone': 'America/Sao_Paulo',
            'pair_separator': '-',
            'scoring': {
                'win_rate_weight': 0.7,
                'games_won_rate_weight': 0.15,
                'participation_factor': 15,
                'age_bonus_threshold': 25,
                'age_bonus_factor': 0.2
            },
            'import': {
                'header_rows': 1,
                'columns': {
                    'date': 'Data',
                    'player1': 'Jogador 1',
                    'player2': 'Jogador 2',
                    'score_a': 'Dupla A',
                    'score_b': 'Dupla B',
                    'player3': 'Jogador 3',
                    'player4': 'Jogador 4'
                },
                'date_formats': [
                    '%d/%m/%Y', '%d/%m/%y', '%d-%m-%Y', '%d.%m.%Y',
                    '%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S'
                ]
            },
            'database': {
                'path': 'bt_league.db'
            },
            'reports': {
                'output_dir': 'reports'
            }
        })
