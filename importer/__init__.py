"""
Import package for the beach tennis league system.
"""

from .import_validator import ImportValidator
from .spreadsheet_reader import SpreadsheetReader

__all__ = ['ImportValidator', 'SpreadsheetReader']
