"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Symbol catalog and game constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    SYMBOL_CATALOG, HAND_SIZE, TURNS_TO_WIN, LOCKOUT_DURATION_MS, MIN_PLAYERS_TO_PLAY,
    all_symbols, validate_symbol_catalog_integrity
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'SYMBOL_CATALOG', 'HAND_SIZE', 'TURNS_TO_WIN', 'LOCKOUT_DURATION_MS', 'MIN_PLAYERS_TO_PLAY',
    'all_symbols', 'validate_symbol_catalog_integrity'
]
