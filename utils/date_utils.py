"""
Date helpers: parsing spreadsheet cells, UTC-midnight normalisation and ages.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

import pandas as pd

DISPLAY_FORMAT = '%d/%m/%Y'

DEFAULT_DATE_FORMATS = [
    '%d/%m/%Y', '%d/%m/%y', '%d-%m-%Y', '%d.%m.%Y',
    '%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S'
]


class DateUtils:
    """Utilities for calendar dates used by matches and players."""

    @staticmethod
    def parse_date(value: Any, formats: Optional[Iterable[str]] = None) -> Optional[date]:
        """
        Parse a spreadsheet cell into a calendar date.
        Accepts date/datetime/Timestamp objects and day-first strings.
        Returns None when the value is missing or cannot be parsed.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, datetime):
            if pd.isna(value):
                return None
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            return None

        text = value.strip()
        if not text:
            return None

        for fmt in formats or DEFAULT_DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None

    @staticmethod
    def to_utc_midnight(day: date) -> datetime:
        """Start of the given calendar day as an aware UTC instant."""
        return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    @staticmethod
    def utc_day(instant: datetime) -> date:
        """Calendar day of an instant in UTC. Naive values are taken as UTC."""
        if instant.tzinfo is None:
            return instant.date()
        return instant.astimezone(timezone.utc).date()

    @staticmethod
    def parse_instant(value: str) -> datetime:
        """Parse a stored ISO timestamp, defaulting to UTC when no offset is present."""
        instant = datetime.fromisoformat(value)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant

    @staticmethod
    def today(tz_name: str = 'UTC') -> date:
        """Current calendar date in the given timezone."""
        return pd.Timestamp.now(tz=tz_name).date()

    @staticmethod
    def calculate_age(dob: Optional[date], as_of: date) -> int:
        """Whole years between dob and as_of; the birthday must have been reached."""
        if dob is None:
            return 0
        age = as_of.year - dob.year
        if (as_of.month, as_of.day) < (dob.month, dob.day):
            age -= 1
        return age

    @staticmethod
    def format_display(day: date) -> str:
        return day.strftime(DISPLAY_FORMAT)

    @staticmethod
    def day_of_week(instant: datetime) -> int:
        """UTC weekday with Sunday = 0 ... Saturday = 6."""
        return (DateUtils.utc_day(instant).weekday() + 1) % 7
