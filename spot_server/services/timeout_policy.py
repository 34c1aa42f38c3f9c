"""
Timeout Policy

Per-player lockout after a wrong guess. Expiry is checked lazily when the
next move arrives; nothing runs in the background to unlock a player.
"""

import time
from typing import Callable, Optional

from ..models.game import Player


def wall_clock_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class TimeoutPolicy:
    """Gates move evaluation for players inside their lockout window."""

    def __init__(self, lockout_duration_ms: int, clock: Optional[Callable[[], int]] = None):
        if lockout_duration_ms < 0:
            raise ValueError("Lockout duration cannot be negative")
        self.lockout_duration_ms = lockout_duration_ms
        self.clock = clock or wall_clock_ms

    def now(self) -> int:
        return self.clock()

    def is_locked(self, player: Player, now: Optional[int] = None) -> bool:
        if player.timeout_until is None:
            return False
        now = self.now() if now is None else now
        return now - player.timeout_until < self.lockout_duration_ms

    def lock(self, player: Player, now: Optional[int] = None) -> None:
        player.timeout_until = self.now() if now is None else now

    def clear(self, player: Player) -> None:
        player.timeout_until = None

    def remaining_ms(self, player: Player, now: Optional[int] = None) -> int:
        """Milliseconds until the player's lockout expires, 0 when not locked."""
        now = self.now() if now is None else now
        if not self.is_locked(player, now):
            return 0
        return player.timeout_until + self.lockout_duration_ms - now
