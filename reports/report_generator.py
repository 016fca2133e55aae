"""
Report generator for the beach tennis league system.
"""

import os
import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from config.config_manager import ConfigManager
from models.match import Match
from models.player import Player, IndividualRanking, DoublesRanking
from ranking.ranking_processor import RankingProcessor
from utils.date_utils import DateUtils

logger = logging.getLogger(__name__)

GAME_NUMBER_COLUMN = 'Nº do Jogo'


class ReportGenerator:
    """Generates ranking and match history exports."""

    def __init__(self, ranking_processor: Optional[RankingProcessor] = None,
                 config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else ConfigManager.get_default_config()
        self.ranking_processor = ranking_processor or RankingProcessor(self.config)
        defaults = ConfigManager.get_default_config()['import']['columns']
        self.columns = {**defaults, **self.config.get('import', {}).get('columns', {})}

    def export_individual_ranking(self, rankings: List[IndividualRanking], output_file: str) -> int:
        """
        Export the individual ranking to CSV.
        Returns the number of players exported.
        """
        if not rankings:
            logger.warning("No players found for individual ranking export")
            return 0

        data = []
        for i, entry in enumerate(rankings, 1):
            data.append({
                'Rank': i,
                'Player': entry.name,
                'Matches': entry.matches_played,
                'Wins': entry.wins,
                'Losses': entry.losses,
                'Games Won': entry.games_won,
                'Games Lost': entry.games_lost,
                'Win Rate %': round(entry.win_rate, 1),
                'Games Won %': round(entry.games_won_rate, 1),
                'Score': round(entry.performance_score, 1)
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Exported individual ranking with {len(rankings)} players to {output_file}")
        return len(rankings)

    def export_doubles_ranking(self, rankings: List[DoublesRanking], output_file: str) -> int:
        """
        Export the doubles ranking to CSV.
        Returns the number of pairs exported.
        """
        if not rankings:
            logger.warning("No pairs found for doubles ranking export")
            return 0

        data = []
        for i, entry in enumerate(rankings, 1):
            data.append({
                'Rank': i,
                'Pair': f"{entry.player1_name} & {entry.player2_name}",
                'Matches': entry.matches_played,
                'Wins': entry.wins,
                'Losses': entry.losses,
                'Games Won': entry.games_won,
                'Games Lost': entry.games_lost,
                'Win Rate %': round(entry.win_rate, 1),
                'Games Won %': round(entry.games_won_rate, 1)
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Exported doubles ranking with {len(rankings)} pairs to {output_file}")
        return len(rankings)

    def build_match_history_frame(self, matches: List[Match], players: List[Player]) -> pd.DataFrame:
        """
        Match history in the import layout, newest first.
        The game number column is ignored when the sheet is imported again.
        """
        player_map = {p.id: p for p in players}

        def name_of(player_id: str) -> str:
            player = player_map.get(player_id)
            return player.name if player else 'N/A'

        ordered = sorted(matches, key=lambda m: (m.date, m.day_id), reverse=True)
        data = []
        for match in ordered:
            data.append({
                self.columns['date']: DateUtils.format_display(DateUtils.utc_day(match.date)),
                GAME_NUMBER_COLUMN: match.day_id,
                self.columns['player1']: name_of(match.team_a.players[0]),
                self.columns['player2']: name_of(match.team_a.players[1]),
                self.columns['score_a']: match.team_a.score,
                self.columns['score_b']: match.team_b.score,
                self.columns['player3']: name_of(match.team_b.players[0]),
                self.columns['player4']: name_of(match.team_b.players[1])
            })

        columns = [
            self.columns['date'], GAME_NUMBER_COLUMN,
            self.columns['player1'], self.columns['player2'],
            self.columns['score_a'], self.columns['score_b'],
            self.columns['player3'], self.columns['player4']
        ]
        return pd.DataFrame(data, columns=columns)

    def export_match_history(self, matches: List[Match], players: List[Player], output_file: str) -> int:
        """
        Export the match history to Excel (.xlsx) or CSV, chosen by extension.
        Returns the number of matches exported.
        """
        if not matches:
            logger.warning("No matches found for history export")
            return 0

        df = self.build_match_history_frame(matches, players)
        if output_file.lower().endswith('.xlsx'):
            df.to_excel(output_file, index=False, sheet_name='Histórico de Jogos')
        else:
            df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Exported match history with {len(matches)} matches to {output_file}")
        return len(matches)

    def generate_statistics_report(self, matches: List[Match], players: List[Player], output_file: str) -> int:
        """Generate a one-row summary of the league. Returns the number of rows written."""
        match_days = {DateUtils.utc_day(m.date) for m in matches}
        total_games = sum(m.team_a.score + m.team_b.score for m in matches)

        stats = {
            'Players': len(players),
            'Matches': len(matches),
            'Match Days': len(match_days),
            'Average Games per Match': round(total_games / len(matches), 2) if matches else 0,
            'First Match Day': DateUtils.format_display(min(match_days)) if match_days else '',
            'Last Match Day': DateUtils.format_display(max(match_days)) if match_days else ''
        }

        pd.DataFrame([stats]).to_csv(output_file, index=False, encoding='utf-8')
        logger.info(f"Generated statistics report: {output_file}")
        return 1

    def generate_all_reports(self, matches: List[Match], players: List[Player],
                             output_directory: Optional[str] = None) -> Dict[str, int]:
        """Generate all available reports."""
        if output_directory is None:
            output_directory = self.config.get('reports', {}).get('output_dir', 'reports')
        os.makedirs(output_directory, exist_ok=True)

        report_results = {}

        individual = self.ranking_processor.calculate_individual_rankings(matches, players)
        report_results['individual_ranking'] = self.export_individual_ranking(
            individual, os.path.join(output_directory, "individual_ranking.csv")
        )

        doubles = self.ranking_processor.calculate_doubles_rankings(matches, players)
        report_results['doubles_ranking'] = self.export_doubles_ranking(
            doubles, os.path.join(output_directory, "doubles_ranking.csv")
        )

        report_results['match_history'] = self.export_match_history(
            matches, players, os.path.join(output_directory, "match_history.xlsx")
        )

        report_results['statistics'] = self.generate_statistics_report(
            matches, players, os.path.join(output_directory, "statistics_report.csv")
        )

        logger.info(f"Generated all reports in directory: {output_directory}")
        return report_results
