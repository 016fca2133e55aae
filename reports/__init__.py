"""
Reports package for the beach tennis league system.
"""

from .report_generator import ReportGenerator

__all__ = ['ReportGenerator']
