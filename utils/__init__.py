"""
Utility functions package for the beach tennis league system.
"""

from .name_utils import NameUtils
from .date_utils import DateUtils

__all__ = ['NameUtils', 'DateUtils']
