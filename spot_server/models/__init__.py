"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import MatchPhase, MoveOutcome, MatchConfig, Player, PlayerSnapshot, MatchSnapshot
from .identity import Identity

__all__ = [
    'MatchPhase', 'MoveOutcome', 'MatchConfig', 'Player', 'PlayerSnapshot', 'MatchSnapshot',
    'Identity'
]
