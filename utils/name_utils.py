"""
Name utilities for matching spreadsheet names against the roster.
"""

import re
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from models.player import Player


class NameUtils:
    """Utilities for name processing and case-insensitive lookup."""

    @staticmethod
    def clean_name(name: Any) -> str:
        """Return the trimmed display form of a cell value, '' for missing cells."""
        if name is None:
            return ""
        if not isinstance(name, str) and pd.isna(name):
            return ""
        return re.sub(r'\s+', ' ', str(name).strip())

    @staticmethod
    def normalize_key(name: Any) -> str:
        """Case-insensitive lookup key for a player name, accented letters included."""
        return NameUtils.clean_name(name).casefold()

    @staticmethod
    def build_name_index(players: Iterable[Player]) -> Dict[str, Player]:
        """
        Index the roster by normalized name.
        With duplicate names the last player wins, so names should be kept unique.
        """
        return {NameUtils.normalize_key(p.name): p for p in players}

    @staticmethod
    def find_player(name: Any, name_index: Dict[str, Player]) -> Optional[Player]:
        key = NameUtils.normalize_key(name)
        if not key:
            return None
        return name_index.get(key)
