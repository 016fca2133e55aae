"""
Match data models for the beach tennis league system.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import List, Optional, Tuple

# Games are played to 4, no tie.
WINNING_SCORE = 4


class DayOfWeek(IntEnum):
    """Weekday numbering used by the match filters (Sunday first)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


@dataclass
class Team:
    """One side of a doubles match."""
    players: Tuple[str, str]
    score: int


@dataclass
class Match:
    """A recorded doubles match.

    ``date`` is a timezone-aware instant at UTC midnight of the match day.
    ``day_id`` is the sequencing number assigned by the storage layer; imported
    matches carry 0 until persisted.
    """
    id: str
    day_id: int
    date: datetime
    team_a: Team
    team_b: Team

    def winner(self) -> Optional[str]:
        """Return 'A' or 'B' for the higher score, None when the scores are equal."""
        if self.team_a.score > self.team_b.score:
            return 'A'
        if self.team_b.score > self.team_a.score:
            return 'B'
        return None

    def player_ids(self) -> List[str]:
        return list(self.team_a.players) + list(self.team_b.players)


def is_valid_score(score_a: int, score_b: int) -> bool:
    """Exactly one team reaches the winning score, the other stays in [0, 3]."""
    for score in (score_a, score_b):
        if score < 0 or score > WINNING_SCORE:
            return False
    return (score_a == WINNING_SCORE) != (score_b == WINNING_SCORE)


def validate_match(match: Match) -> None:
    """Raise ValueError if the match breaks the team or score invariants."""
    for label, team in (('A', match.team_a), ('B', match.team_b)):
        if len(team.players) != 2:
            raise ValueError(f"Team {label} of match {match.id} must have exactly 2 players")
        if team.players[0] == team.players[1]:
            raise ValueError(f"Team {label} of match {match.id} lists the same player twice")
    if len(set(match.player_ids())) != 4:
        raise ValueError(f"Match {match.id} must have four distinct players")
    if not is_valid_score(match.team_a.score, match.team_b.score):
        raise ValueError(
            f"Invalid score {match.team_a.score}x{match.team_b.score} for match {match.id}: "
            f"one team must have exactly {WINNING_SCORE}"
        )
