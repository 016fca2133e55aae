"""
Outcome of a spreadsheet import validation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .match import Match


class ImportStatus(Enum):
    READY = "ready"
    REJECTED = "rejected"
    PENDING_PLAYERS = "pending_players"
    FAILED = "failed"


class ImportErrorCategory(Enum):
    CONFLICTING_DATES = "conflicting_dates"
    FUTURE_DATES = "future_dates"
    INVALID_DATA = "invalid_data"


@dataclass
class ImportResult:
    """Result of ImportValidator.validate.

    Only one of ``matches``, ``rows``/``dates`` or ``pending_players`` is
    populated, depending on ``status``.
    """
    status: ImportStatus
    message: str
    category: Optional[ImportErrorCategory] = None
    rows: List[int] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    pending_players: List[str] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return self.status == ImportStatus.READY
