"""
Player and ranking data models for the beach tennis league system.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Player:
    """Roster entry for a registered player."""
    id: str
    name: str
    dob: Optional[date] = None
    avatar: str = ""


@dataclass
class IndividualRanking:
    """Derived per-player statistics, recomputed on every call."""
    player_id: str
    name: str
    avatar: str = ""
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    games_won: int = 0
    games_lost: int = 0
    win_rate: float = 0.0
    games_won_rate: float = 0.0
    performance_score: float = 0.0


@dataclass
class DoublesRanking:
    """Derived statistics for an unordered pair that played together."""
    pair_id: str
    player1_id: str
    player2_id: str
    player1_name: str
    player2_name: str
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    games_won: int = 0
    games_lost: int = 0
    win_rate: float = 0.0
    games_won_rate: float = 0.0
