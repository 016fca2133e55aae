"""
Main application for the beach tennis league system.

Usage: python bt_main.py [spreadsheet.xlsx]
"""

import logging
import sys
from typing import Optional

from database.database_manager import DatabaseManager
from database.player_manager import PlayerManager
from database.match_manager import MatchManager
from importer.import_validator import ImportValidator
from importer.spreadsheet_reader import SpreadsheetReader
from models.import_result import ImportStatus
from ranking.ranking_processor import RankingProcessor
from reports.report_generator import ReportGenerator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def import_spreadsheet(spreadsheet: str, validator: ImportValidator,
                       player_manager: PlayerManager, match_manager: MatchManager) -> ImportStatus:
    """Validate a spreadsheet against the current data and store it when clean."""
    rows = SpreadsheetReader.read_rows(spreadsheet, validator.header_rows)
    result = validator.validate(rows, player_manager.get_all_players(), match_manager.get_all_matches())

    if result.status == ImportStatus.READY:
        stored = match_manager.add_matches(result.matches)
        logger.info(f"{result.message} ({len(stored)} stored)")
    elif result.status == ImportStatus.PENDING_PLAYERS:
        logger.warning(result.message)
        logger.warning(f"Register these players and import the file again: {', '.join(result.pending_players)}")
    else:
        logger.error(result.message)

    return result.status


def main(config_file: str = "config.yaml", spreadsheet: Optional[str] = None) -> None:
    """Main application entry point."""
    try:
        logger.info("Starting beach tennis league system...")

        db_manager = DatabaseManager(config_file=config_file)
        player_manager = PlayerManager(db_manager)
        match_manager = MatchManager(db_manager)
        ranking_processor = RankingProcessor(db_manager.config)
        report_generator = ReportGenerator(ranking_processor, db_manager.config)

        if spreadsheet:
            logger.info(f"Importing match history from {spreadsheet}...")
            status = import_spreadsheet(spreadsheet, ImportValidator(db_manager.config),
                                        player_manager, match_manager)
            if status in (ImportStatus.REJECTED, ImportStatus.FAILED):
                sys.exit(1)

        # Always rank a fresh snapshot
        players = player_manager.get_all_players()
        matches = match_manager.get_all_matches()

        stats = db_manager.get_database_stats()
        logger.info(f"Database statistics: {stats}")

        individual = ranking_processor.calculate_individual_rankings(matches, players)
        for position, entry in enumerate(individual[:5], 1):
            logger.info(f"{position}. {entry.name} - score {entry.performance_score:.1f}, "
                        f"{entry.wins}W/{entry.losses}L ({entry.win_rate:.1f}%)")

        logger.info("Generating reports...")
        report_results = report_generator.generate_all_reports(matches, players)
        logger.info(f"Generated reports: {report_results}")

        logger.info("Beach tennis league system completed successfully")

    except Exception as e:
        logger.error(f"Error in beach tennis league system: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


def cli() -> None:
    main("config.yaml", sys.argv[1] if len(sys.argv) > 1 else None)


if __name__ == "__main__":
    cli()
