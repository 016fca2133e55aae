"""
Configuration package for the beach tennis league system.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
