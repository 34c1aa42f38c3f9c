"""
Broadcast Emitter

Fan-out point for match snapshots. Listeners are called synchronously, in
registration order, every time the match changes.
"""

from typing import Callable, Dict

from ..models.game import MatchSnapshot
from ..utils.game_logger import game_logger

Listener = Callable[[MatchSnapshot], None]


class BroadcastEmitter:
    """Holds snapshot listeners and notifies them."""

    def __init__(self):
        self._listeners: Dict[int, Listener] = {}
        self._next_token = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            Callable that removes the listener again. Calling it twice is harmless.
        """
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def emit(self, snapshot: MatchSnapshot) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners.values()):
            try:
                listener(snapshot)
            except Exception as e:
                game_logger.log_game_event('listener_failed',
                                           listener=getattr(listener, '__qualname__', repr(listener)),
                                           error=str(e),
                                           error_type=type(e).__name__,
                                           phase=snapshot.phase.value)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
