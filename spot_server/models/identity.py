"""
Identity Data Models

Contains the identity handed to the match engine by the identity layer.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Stable player identity bound to a device."""
    player_id: str
    name: Optional[str] = None  # display only, never used for comparison
