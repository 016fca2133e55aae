"""
Validation and normalization of spreadsheet match imports.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from config.config_manager import ConfigManager
from models.import_result import ImportResult, ImportStatus, ImportErrorCategory
from models.match import Match, Team, is_valid_score
from models.player import Player
from utils.date_utils import DateUtils
from utils.name_utils import NameUtils

logger = logging.getLogger(__name__)

PLAYER_FIELDS = ('player1', 'player2', 'player3', 'player4')

MSG_CONFLICTING_DATES = ("Import failed: Games already exist on the following date(s): {dates}. "
                         "Please remove them from the spreadsheet.")
MSG_FUTURE_DATES = "Import failed: Future dates found on row(s): {rows}. Dates cannot be in the future."
MSG_INVALID_DATA = ("Import failed: Invalid data or scores found on row(s): {rows}. "
                    "Scores must be between 0 and 4, and one team must have exactly 4.")
MSG_PENDING_PLAYERS = "Import paused: {count} new player(s) found in the spreadsheet."
MSG_PARSE_FAILURE = ("Failed to parse the spreadsheet. Please ensure it's in the correct format "
                     "and all required columns are present.")
MSG_SUCCESS = "Successfully imported {count} matches."


@dataclass
class _ValidationReport:
    conflicting_dates: List[str] = field(default_factory=list)
    future_rows: List[int] = field(default_factory=list)
    invalid_rows: List[int] = field(default_factory=list)
    unknown_names: Dict[str, str] = field(default_factory=dict)

    def add_invalid(self, row_number: int) -> None:
        if row_number not in self.invalid_rows:
            self.invalid_rows.append(row_number)


class ImportValidator:
    """
    Cross-checks spreadsheet rows against the roster and match history.

    The whole batch is either rejected, paused for player registration or
    turned into new Match records; rows are never imported partially.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else ConfigManager.get_default_config()
        import_config = self.config.get('import', {})
        defaults = ConfigManager.get_default_config()['import']
        self.columns = {**defaults['columns'], **import_config.get('columns', {})}
        self.header_rows = import_config.get('header_rows', defaults['header_rows'])
        self.date_formats = import_config.get('date_formats', defaults['date_formats'])
        self.timezone = self.config.get('timezone', 'UTC')

    def validate(self, rows: Iterable[Mapping[str, Any]], players: Iterable[Player],
                 matches: Iterable[Match], today: Optional[date] = None) -> ImportResult:
        """
        Validate a parsed spreadsheet and, when clean, materialize new matches.

        Rejections are reported in fixed precedence: conflicting dates, future
        dates, invalid scores or data, then unknown players (a pause, not a failure).
        """
        rows = list(rows)
        today = today or DateUtils.today(self.timezone)
        try:
            name_index = NameUtils.build_name_index(players)
            existing_days = {DateUtils.utc_day(m.date) for m in matches}
            report = self._scan_rows(rows, name_index, existing_days, today)
        except Exception as e:
            logger.error(f"Error validating import rows: {e}")
            return ImportResult(status=ImportStatus.FAILED, message=MSG_PARSE_FAILURE)

        rejection = self._check_rejections(report)
        if rejection is not None:
            logger.warning(rejection.message)
            return rejection

        try:
            imported = self._materialize(rows, name_index)
        except Exception as e:
            logger.error(f"Error materializing imported matches: {e}")
            return ImportResult(status=ImportStatus.FAILED, message=MSG_PARSE_FAILURE)

        logger.info(f"Import validated: {len(imported)} new matches ready")
        return ImportResult(
            status=ImportStatus.READY,
            message=MSG_SUCCESS.format(count=len(imported)),
            matches=imported
        )

    def _row_number(self, index: int) -> int:
        """Spreadsheet row of the index-th data row (0-based), counting the header."""
        return index + 1 + self.header_rows

    def _scan_rows(self, rows: List[Mapping[str, Any]], name_index: Dict[str, Player],
                   existing_days: set, today: date) -> _ValidationReport:
        report = _ValidationReport()

        for index, row in enumerate(rows):
            row_number = self._row_number(index)

            score_a = self.parse_score(row.get(self.columns['score_a']))
            score_b = self.parse_score(row.get(self.columns['score_b']))
            if score_a is None or score_b is None or not is_valid_score(score_a, score_b):
                report.add_invalid(row_number)

            match_day = DateUtils.parse_date(row.get(self.columns['date']), self.date_formats)
            if match_day is None:
                report.add_invalid(row_number)
            else:
                if match_day > today:
                    report.future_rows.append(row_number)
                if match_day in existing_days:
                    display = DateUtils.format_display(match_day)
                    if display not in report.conflicting_dates:
                        report.conflicting_dates.append(display)

            names = [NameUtils.clean_name(row.get(self.columns[f])) for f in PLAYER_FIELDS]
            if not all(names):
                report.add_invalid(row_number)
            elif len({NameUtils.normalize_key(n) for n in names}) != len(names):
                # the same player on both sides or twice in a team
                report.add_invalid(row_number)

            for name in names:
                key = NameUtils.normalize_key(name)
                if key and key not in name_index and key not in report.unknown_names:
                    report.unknown_names[key] = name

        return report

    def _check_rejections(self, report: _ValidationReport) -> Optional[ImportResult]:
        if report.conflicting_dates:
            return ImportResult(
                status=ImportStatus.REJECTED,
                category=ImportErrorCategory.CONFLICTING_DATES,
                dates=list(report.conflicting_dates),
                message=MSG_CONFLICTING_DATES.format(dates=', '.join(report.conflicting_dates))
            )
        if report.future_rows:
            future_rows = list(dict.fromkeys(report.future_rows))
            return ImportResult(
                status=ImportStatus.REJECTED,
                category=ImportErrorCategory.FUTURE_DATES,
                rows=future_rows,
                message=MSG_FUTURE_DATES.format(rows=', '.join(str(r) for r in future_rows))
            )
        if report.invalid_rows:
            return ImportResult(
                status=ImportStatus.REJECTED,
                category=ImportErrorCategory.INVALID_DATA,
                rows=list(report.invalid_rows),
                message=MSG_INVALID_DATA.format(rows=', '.join(str(r) for r in report.invalid_rows))
            )
        if report.unknown_names:
            pending = list(report.unknown_names.values())
            return ImportResult(
                status=ImportStatus.PENDING_PLAYERS,
                pending_players=pending,
                message=MSG_PENDING_PLAYERS.format(count=len(pending))
            )
        return None

    def _materialize(self, rows: List[Mapping[str, Any]], name_index: Dict[str, Player]) -> List[Match]:
        imported = []
        for index, row in enumerate(rows):
            match_day = DateUtils.parse_date(row.get(self.columns['date']), self.date_formats)
            if match_day is None:
                raise ValueError(f"Unparseable date on row {self._row_number(index)}")
            match_date = DateUtils.to_utc_midnight(match_day)

            player_ids = []
            for f in PLAYER_FIELDS:
                player = NameUtils.find_player(row.get(self.columns[f]), name_index)
                if player is None:
                    raise ValueError(f"Unresolved player on row {self._row_number(index)}")
                player_ids.append(player.id)

            score_a = self.parse_score(row.get(self.columns['score_a']))
            score_b = self.parse_score(row.get(self.columns['score_b']))
            if score_a is None or score_b is None:
                raise ValueError(f"Unparseable score on row {self._row_number(index)}")

            timestamp_ms = int(match_date.timestamp() * 1000)
            imported.append(Match(
                id=f"imported-{timestamp_ms}-{index}",
                day_id=0,
                date=match_date,
                team_a=Team(players=(player_ids[0], player_ids[1]), score=score_a),
                team_b=Team(players=(player_ids[2], player_ids[3]), score=score_b)
            ))
        return imported

    @staticmethod
    def parse_score(value: Any) -> Optional[int]:
        """Parse a score cell as an integer; None when it is missing or not integral."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return int(text)
            except ValueError:
                try:
                    number = float(text.replace(',', '.'))
                except ValueError:
                    return None
                return int(number) if number.is_integer() else None
        if isinstance(value, int):
            return value
        try:
            if pd.isna(value):
                return None
            number = float(value)
        except (TypeError, ValueError):
            return None
        return int(number) if number.is_integer() else None
