"""
Ranking package for the beach tennis league system.
"""

from .ranking_processor import RankingProcessor

__all__ = ['RankingProcessor']
