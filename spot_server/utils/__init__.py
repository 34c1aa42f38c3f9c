"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_identity, websocket_identity_required
from .helpers import get_device_id, get_bearer_token
from .game_logger import game_logger

__all__ = ['require_identity', 'websocket_identity_required', 'get_device_id', 'get_bearer_token', 'game_logger']
