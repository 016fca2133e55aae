"""
Ranking processor for the beach tennis league system.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from config.config_manager import ConfigManager
from models.match import Match
from models.player import Player, IndividualRanking, DoublesRanking
from utils.date_utils import DateUtils

logger = logging.getLogger(__name__)


@dataclass
class _StatLine:
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    games_won: int = 0
    games_lost: int = 0

    def record(self, own_score: int, opponent_score: int, outcome: Optional[bool]) -> None:
        """Add one match. outcome is True for a win, False for a loss, None for no decision."""
        self.matches_played += 1
        if outcome is True:
            self.wins += 1
        elif outcome is False:
            self.losses += 1
        self.games_won += own_score
        self.games_lost += opponent_score

    @property
    def win_rate(self) -> float:
        return self.wins / self.matches_played * 100 if self.matches_played > 0 else 0.0

    @property
    def games_won_rate(self) -> float:
        games_total = self.games_won + self.games_lost
        return self.games_won / games_total * 100 if games_total > 0 else 0.0


class RankingProcessor:
    """Computes individual and doubles rankings from a match history.

    Every call recomputes from the given snapshots; inputs are never mutated.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else ConfigManager.get_default_config()
        scoring = self.config.get('scoring', {})
        self.win_rate_weight = scoring.get('win_rate_weight', 0.7)
        self.games_won_rate_weight = scoring.get('games_won_rate_weight', 0.15)
        self.participation_factor = scoring.get('participation_factor', 15)
        self.age_bonus_threshold = scoring.get('age_bonus_threshold', 25)
        self.age_bonus_factor = scoring.get('age_bonus_factor', 0.2)
        self.pair_separator = self.config.get('pair_separator', '-')
        self.timezone = self.config.get('timezone', 'UTC')

    def calculate_individual_rankings(self, matches: Iterable[Match], players: Iterable[Player],
                                      as_of: Optional[date] = None,
                                      weekday: Optional[int] = None) -> List[IndividualRanking]:
        """
        Rank every roster player by performance score, ties broken by wins.
        Players without matches are included with zeroed counts.
        """
        as_of = as_of or DateUtils.today(self.timezone)
        player_map = {p.id: p for p in players}
        stats: Dict[str, _StatLine] = {player_id: _StatLine() for player_id in player_map}

        for match in self.filter_matches_by_weekday(matches, weekday):
            winner = match.winner()
            if winner is None:
                logger.debug(f"Match {match.id} has equal scores, counted as no decision")
            for team_label, team, opponent in (('A', match.team_a, match.team_b),
                                               ('B', match.team_b, match.team_a)):
                outcome = None if winner is None else winner == team_label
                for player_id in team.players:
                    line = stats.get(player_id)
                    if line is None:
                        logger.debug(f"Match {match.id} references unknown player {player_id}")
                        continue
                    line.record(team.score, opponent.score, outcome)

        rankings = []
        for player_id, line in stats.items():
            player = player_map[player_id]
            rankings.append(IndividualRanking(
                player_id=player_id,
                name=player.name,
                avatar=player.avatar,
                matches_played=line.matches_played,
                wins=line.wins,
                losses=line.losses,
                games_won=line.games_won,
                games_lost=line.games_lost,
                win_rate=line.win_rate,
                games_won_rate=line.games_won_rate,
                performance_score=self.calculate_performance_score(line, player, as_of)
            ))

        rankings.sort(key=lambda r: (-r.performance_score, -r.wins))
        logger.info(f"Computed individual ranking for {len(rankings)} players")
        return rankings

    def calculate_performance_score(self, line: _StatLine, player: Player, as_of: date) -> float:
        """Composite score: weighted win rate and games-won rate plus participation and age bonuses."""
        participation_bonus = math.log10(line.matches_played + 1) * self.participation_factor
        age = DateUtils.calculate_age(player.dob, as_of)
        age_bonus = max(0, age - self.age_bonus_threshold) * self.age_bonus_factor
        return (line.win_rate * self.win_rate_weight
                + line.games_won_rate * self.games_won_rate_weight
                + participation_bonus
                + age_bonus)

    def make_pair_key(self, player1_id: str, player2_id: str) -> str:
        """Canonical key for an unordered pair of player ids."""
        return self.pair_separator.join(sorted((player1_id, player2_id)))

    def calculate_doubles_rankings(self, matches: Iterable[Match], players: Iterable[Player],
                                   weekday: Optional[int] = None) -> List[DoublesRanking]:
        """
        Rank every pair that played together by matches played, ties broken by win rate.
        Names of players missing from the roster are shown as 'N/A'.
        """
        player_map = {p.id: p for p in players}
        stats: Dict[str, _StatLine] = {}
        members: Dict[str, List[str]] = {}

        for match in self.filter_matches_by_weekday(matches, weekday):
            winner = match.winner()
            for team_label, team, opponent in (('A', match.team_a, match.team_b),
                                               ('B', match.team_b, match.team_a)):
                pair_key = self.make_pair_key(team.players[0], team.players[1])
                if pair_key not in stats:
                    stats[pair_key] = _StatLine()
                    members[pair_key] = sorted(team.players)
                outcome = None if winner is None else winner == team_label
                stats[pair_key].record(team.score, opponent.score, outcome)

        rankings = []
        for pair_key, line in stats.items():
            if line.matches_played == 0:
                continue
            player1_id, player2_id = members[pair_key]
            rankings.append(DoublesRanking(
                pair_id=pair_key,
                player1_id=player1_id,
                player2_id=player2_id,
                player1_name=self._player_name(player_map, player1_id),
                player2_name=self._player_name(player_map, player2_id),
                matches_played=line.matches_played,
                wins=line.wins,
                losses=line.losses,
                games_won=line.games_won,
                games_lost=line.games_lost,
                win_rate=line.win_rate,
                games_won_rate=line.games_won_rate
            ))

        rankings.sort(key=lambda r: (-r.matches_played, -r.win_rate))
        logger.info(f"Computed doubles ranking for {len(rankings)} pairs")
        return rankings

    @staticmethod
    def _player_name(player_map: Dict[str, Player], player_id: str) -> str:
        player = player_map.get(player_id)
        return player.name if player else 'N/A'

    @staticmethod
    def filter_matches_by_weekday(matches: Iterable[Match], weekday: Optional[int] = None) -> List[Match]:
        """Keep matches played on the given UTC weekday (Sunday = 0). None keeps all."""
        if weekday is None:
            return list(matches)
        return [m for m in matches if DateUtils.day_of_week(m.date) == int(weekday)]

    def get_performance_over_time(self, player_id: str, matches: Iterable[Match],
                                  weekday: Optional[int] = None) -> List[Dict[str, Any]]:
        """Cumulative win rate after each of the player's matches, oldest first."""
        player_matches = [
            m for m in self.filter_matches_by_weekday(matches, weekday)
            if player_id in m.player_ids()
        ]
        player_matches.sort(key=lambda m: m.date)

        history = []
        cumulative_wins = 0
        for index, match in enumerate(player_matches, 1):
            if player_id in match.team_a.players:
                won = match.team_a.score > match.team_b.score
            else:
                won = match.team_b.score > match.team_a.score
            if won:
                cumulative_wins += 1
            history.append({
                'date': DateUtils.format_display(DateUtils.utc_day(match.date)),
                'match': index,
                'win_rate': round(cumulative_wins / index * 100, 2)
            })
        return history
