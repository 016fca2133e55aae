"""
Models package for the beach tennis league system.

This package contains all data models and dataclasses used throughout the system.
"""

from .player import Player, IndividualRanking, DoublesRanking
from .match import Team, Match, DayOfWeek, WINNING_SCORE, is_valid_score, validate_match
from .import_result import ImportStatus, ImportErrorCategory, ImportResult

__all__ = [
    'Player', 'IndividualRanking', 'DoublesRanking',
    'Team', 'Match', 'DayOfWeek', 'WINNING_SCORE', 'is_valid_score', 'validate_match',
    'ImportStatus', 'ImportErrorCategory', 'ImportResult'
]
