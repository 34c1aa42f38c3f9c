"""
Game Data Models

Contains all match-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config.game_settings import HAND_SIZE, TURNS_TO_WIN, LOCKOUT_DURATION_MS, MIN_PLAYERS_TO_PLAY


class MatchPhase(Enum):
    """Phases of the match state machine."""
    WAITING_FOR_PLAYERS = "WAITING_FOR_PLAYERS"
    PREPARE_INITIAL_ROUND = "PREPARE_INITIAL_ROUND"
    WAIT_FOR_PLAYER_MOVE = "WAIT_FOR_PLAYER_MOVE"
    PREPARE_NEXT_ROUND = "PREPARE_NEXT_ROUND"
    RESULTS = "RESULTS"


class MoveOutcome(Enum):
    """What the engine did with a submitted move."""
    IGNORED = "IGNORED"    # wrong phase, unknown player, malformed or locked out
    REJECTED = "REJECTED"  # wrong guess, player is now locked out
    ACCEPTED = "ACCEPTED"  # correct guess, next round dealt
    WON = "WON"            # correct guess that ended the match


@dataclass(frozen=True)
class MatchConfig:
    """Per-match rules."""
    lockout_duration_ms: int = LOCKOUT_DURATION_MS
    turns_to_win: int = TURNS_TO_WIN
    hand_size: int = HAND_SIZE
    min_players: int = MIN_PLAYERS_TO_PLAY

    def __post_init__(self):
        if self.lockout_duration_ms < 0:
            raise ValueError("lockout_duration_ms cannot be negative")
        if self.turns_to_win <= 0:
            raise ValueError("turns_to_win must be positive")
        if self.hand_size <= 0:
            raise ValueError("hand_size must be positive")
        if self.min_players <= 0:
            raise ValueError("min_players must be positive")

    @classmethod
    def from_app_config(cls, app_config: Mapping[str, Any]) -> "MatchConfig":
        """Build match rules from a Flask config mapping."""
        return cls(
            lockout_duration_ms=int(app_config.get('LOCKOUT_DURATION_MS', LOCKOUT_DURATION_MS)),
            turns_to_win=int(app_config.get('TURNS_TO_WIN', TURNS_TO_WIN)),
            hand_size=int(app_config.get('HAND_SIZE', HAND_SIZE)),
            min_players=int(app_config.get('MIN_PLAYERS', MIN_PLAYERS_TO_PLAY)),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            'lockout_duration_ms': self.lockout_duration_ms,
            'turns_to_win': self.turns_to_win,
            'hand_size': self.hand_size,
            'min_players': self.min_players,
        }


@dataclass
class Player:
    """Server-side player record. Only the match engine mutates it."""
    id: str
    name: str
    turns_remaining: int
    hand: List[str] = field(default_factory=list)
    is_ready: bool = False
    timeout_until: Optional[int] = None  # epoch ms of the last lockout start

    def snapshot(self) -> "PlayerSnapshot":
        return PlayerSnapshot(
            id=self.id,
            name=self.name,
            hand=tuple(self.hand),
            is_ready=self.is_ready,
            turns_remaining=self.turns_remaining,
            timeout_until=self.timeout_until,
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    """Immutable view of a player."""
    id: str
    name: str
    hand: Tuple[str, ...]
    is_ready: bool
    turns_remaining: int
    timeout_until: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'hand': list(self.hand),
            'is_ready': self.is_ready,
            'turns_remaining': self.turns_remaining,
            'timeout_until': self.timeout_until,
        }


@dataclass(frozen=True)
class MatchSnapshot:
    """Immutable view of the whole match, broadcast after every transition."""
    phase: MatchPhase
    players: Tuple[PlayerSnapshot, ...]
    central_set: Tuple[str, ...]
    config: MatchConfig
    winner_id: Optional[str] = None
    winner_name: Optional[str] = None

    def get_player(self, player_id: str) -> Optional[PlayerSnapshot]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable wire shape."""
        return {
            'phase': self.phase.value,
            'players': [player.to_dict() for player in self.players],
            'central_set': list(self.central_set),
            'config': self.config.to_dict(),
            'winner_id': self.winner_id,
            'winner_name': self.winner_name,
        }
