"""
Services Package

Contains all business logic and service classes.
"""

from .broadcast import BroadcastEmitter
from .hand_generator import draw_central_set, draw_player_hand, shares_symbol
from .identity_service import IdentityService, get_identity_service
from .match_service import MatchEngine, get_match_engine
from .timeout_policy import TimeoutPolicy

__all__ = [
    'BroadcastEmitter',
    'draw_central_set', 'draw_player_hand', 'shares_symbol',
    'IdentityService', 'get_identity_service',
    'MatchEngine', 'get_match_engine',
    'TimeoutPolicy'
]
