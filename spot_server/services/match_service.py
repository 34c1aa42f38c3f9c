"""
Match Service

Contains the server-authoritative match engine: phase handling, dealing,
move validation, lockouts and win detection.
"""

import random
import threading
from typing import Callable, Dict, List, Optional, Sequence

from flask import current_app

from ..config.game_settings import validate_symbol_catalog_integrity
from ..models.game import MatchConfig, MatchPhase, MatchSnapshot, MoveOutcome, Player, PlayerSnapshot
from ..utils.game_logger import game_logger
from .broadcast import BroadcastEmitter, Listener
from .hand_generator import draw_central_set, draw_player_hand, shares_symbol
from .timeout_policy import TimeoutPolicy


class MatchEngine:
    """
    Single-match game engine.

    This class handles:
    - Player roster and readiness
    - Dealing the central set and the hands
    - Move validation with per-player lockout
    - Round progression and win detection
    - Emitting an immutable snapshot after every transition

    Commands never raise for bad input; anything illegal for the current
    phase, or referencing an unknown player, is ignored without emission.
    Commands are serialized with a re-entrant lock so listeners may read
    the engine while being notified.
    """

    def __init__(self,
                 config: Optional[MatchConfig] = None,
                 clock: Optional[Callable[[], int]] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or MatchConfig()
        validate_symbol_catalog_integrity(self.config.hand_size)

        self.timeout_policy = TimeoutPolicy(self.config.lockout_duration_ms, clock)
        self._rng = rng
        self._emitter = BroadcastEmitter()
        self._lock = threading.RLock()

        self._phase = MatchPhase.WAITING_FOR_PLAYERS
        self._players: Dict[str, Player] = {}
        self._central_set: List[str] = []
        self._winner_id: Optional[str] = None
        self._winner_name: Optional[str] = None

    # ---- Observation ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a snapshot listener; returns its unsubscribe handle."""
        return self._emitter.subscribe(listener)

    @property
    def phase(self) -> MatchPhase:
        return self._phase

    @property
    def player_count(self) -> int:
        return len(self._players)

    def snapshot(self) -> MatchSnapshot:
        """Returns an immutable copy of the current match state."""
        with self._lock:
            return MatchSnapshot(
                phase=self._phase,
                players=tuple(player.snapshot() for player in self._players.values()),
                central_set=tuple(self._central_set),
                config=self.config,
                winner_id=self._winner_id,
                winner_name=self._winner_name,
            )

    # ---- Commands ----

    def join(self, player_id: str, name: Optional[str] = None) -> Optional[PlayerSnapshot]:
        """
        Adds a player to the roster.

        Args:
            player_id: Stable identifier supplied by the identity layer
            name: Optional display name, defaults to "Player N"

        Returns:
            Snapshot of the new player, or None when nothing changed
        """
        with self._lock:
            if self._phase != MatchPhase.WAITING_FOR_PLAYERS:
                return None
            if not isinstance(player_id, str) or not player_id:
                return None
            if player_id in self._players:
                return None

            display_name = name.strip() if isinstance(name, str) and name.strip() else None
            player = Player(
                id=player_id,
                name=display_name or f"Player {len(self._players) + 1}",
                turns_remaining=self.config.turns_to_win,
            )
            self._players[player_id] = player

            game_logger.log_game_event('player_joined', player_id, name=player.name,
                                       players_count=len(self._players))
            self._send_state()
            return player.snapshot()

    def rename(self, player_id: str, name: str) -> bool:
        """Overwrites a player's display name. Allowed in every phase."""
        with self._lock:
            player = self._players.get(player_id)
            if not player or not isinstance(name, str) or not name.strip():
                return False
            if player.name == name.strip():
                return False

            player.name = name.strip()
            if self._winner_id == player_id:
                self._winner_name = player.name
            self._send_state()
            return True

    def set_ready(self, player_id: str) -> bool:
        """
        Marks a player as ready and starts the match once everyone is.

        Returns:
            bool: True if the player's readiness changed
        """
        with self._lock:
            if self._phase != MatchPhase.WAITING_FOR_PLAYERS:
                return False

            player = self._players.get(player_id)
            if not player or player.is_ready:
                return False

            player.is_ready = True

            if self._can_start_match():
                self._prepare_initial_round()
            else:
                self._send_state()
            return True

    def submit_move(self, player_id: str, selection: Sequence[str]) -> MoveOutcome:
        """
        Evaluates a move.

        A move names two symbols, one picked on the central set and one on
        the player's own hand. It is correct when both name the same symbol
        and that symbol is on the hand and on the central set.

        Args:
            player_id: Player submitting the move
            selection: Two symbol references

        Returns:
            MoveOutcome describing what happened
        """
        with self._lock:
            if self._phase != MatchPhase.WAIT_FOR_PLAYER_MOVE:
                return MoveOutcome.IGNORED

            if isinstance(selection, (str, bytes)) or not isinstance(selection, (list, tuple)) \
                    or len(selection) != 2:
                return MoveOutcome.IGNORED

            player = self._players.get(player_id)
            if not player or not player.hand:
                return MoveOutcome.IGNORED

            now = self.timeout_policy.now()
            if self.timeout_policy.is_locked(player, now):
                return MoveOutcome.IGNORED

            self.timeout_policy.clear(player)

            if not self._is_correct_move(player, selection):
                self.timeout_policy.lock(player, now)
                game_logger.log_game_event('move_rejected', player_id,
                                           selection=list(selection), locked_at=now)
                self._send_state()
                return MoveOutcome.REJECTED

            player.turns_remaining = max(0, player.turns_remaining - 1)

            if player.turns_remaining <= 0:
                self._phase = MatchPhase.RESULTS
                self._winner_id = player.id
                self._winner_name = player.name
                game_logger.log_game_event('match_won', player_id, name=player.name)
                self._send_state()
                return MoveOutcome.WON

            game_logger.log_game_event('move_accepted', player_id, symbol=selection[0],
                                       turns_remaining=player.turns_remaining)
            self._prepare_next_round(player)
            return MoveOutcome.ACCEPTED

    def leave(self, player_id: str) -> bool:
        """
        Removes a player from the roster in any phase.

        Returns:
            bool: True if a player was removed
        """
        with self._lock:
            if player_id not in self._players:
                return False

            del self._players[player_id]
            # The winner's name outlives their roster entry, their id does not
            if self._winner_id == player_id:
                self._winner_id = None
            game_logger.log_game_event('player_left', player_id, phase=self._phase.value,
                                       players_count=len(self._players))

            if self._phase == MatchPhase.WAITING_FOR_PLAYERS and self._can_start_match():
                self._prepare_initial_round()
            else:
                self._send_state()
            return True

    def new_match(self) -> None:
        """Resets the match, keeping the roster and display names."""
        with self._lock:
            self._phase = MatchPhase.WAITING_FOR_PLAYERS
            self._central_set = []
            self._winner_id = None
            self._winner_name = None
            self._reset_players()

            game_logger.log_game_event('new_match', players_count=len(self._players))
            self._send_state()

    # ---- Internals ----

    def _can_start_match(self) -> bool:
        return (
            len(self._players) >= self.config.min_players
            and all(player.is_ready for player in self._players.values())
        )

    def _is_correct_move(self, player: Player, selection: Sequence[str]) -> bool:
        symbol = selection[0]
        return (
            selection[0] == selection[1]
            and symbol in player.hand
            and symbol in self._central_set
        )

    def _prepare_initial_round(self) -> None:
        self._phase = MatchPhase.PREPARE_INITIAL_ROUND
        self._send_state()

        hand_size = self.config.hand_size
        self._central_set = draw_central_set(hand_size, self._rng)
        for player in self._players.values():
            player.hand = draw_player_hand(self._central_set, hand_size, self._rng)

        game_logger.log_game_event('round_dealt', central_set=list(self._central_set),
                                   players_count=len(self._players))

        self._phase = MatchPhase.WAIT_FOR_PLAYER_MOVE
        self._send_state()

    def _prepare_next_round(self, round_winner: Player) -> None:
        self._phase = MatchPhase.PREPARE_NEXT_ROUND
        self._send_state()

        hand_size = self.config.hand_size
        self._central_set = list(round_winner.hand)
        round_winner.hand = draw_player_hand(self._central_set, hand_size, self._rng)

        # Kept hands that lost contact with the new central set are redealt
        for player in self._players.values():
            if player is not round_winner and not shares_symbol(player.hand, self._central_set):
                player.hand = draw_player_hand(self._central_set, hand_size, self._rng)

        self._phase = MatchPhase.WAIT_FOR_PLAYER_MOVE
        self._send_state()

    def _reset_players(self) -> None:
        for player in self._players.values():
            player.turns_remaining = self.config.turns_to_win
            player.hand = []
            player.is_ready = False
            self.timeout_policy.clear(player)

    def _send_state(self) -> None:
        self._emitter.emit(self.snapshot())


def get_match_engine() -> Optional[MatchEngine]:
    """Get the match engine owned by the current application."""
    return getattr(current_app, 'match_engine', None)
