"""
WebSocket Event Handlers

Translates Socket.IO events into match commands and pushes every match
snapshot to all connected clients.
"""

from flask import current_app, request
from flask_socketio import emit

from ..models.game import MatchSnapshot, MoveOutcome
from ..models.identity import Identity
from ..services.identity_service import IdentityService, get_identity_service
from ..services.match_service import get_match_engine
from ..utils.decorators import websocket_identity_required
from ..utils.game_logger import game_logger
from ..utils.helpers import get_device_id


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Identify the connection and put the player on the roster."""
        engine = get_match_engine()
        identity = _resolve_identity(auth)

        if engine is None or identity is None:
            game_logger.log_user_action(request, 'connect_refused')
            return False

        current_app.connected_players[request.sid] = identity
        game_logger.log_user_action(request, 'connect', identity.player_id)

        joined = engine.join(identity.player_id, identity.name)
        if joined is None and identity.name:
            engine.rename(identity.player_id, identity.name)

        emit('state_change', engine.snapshot().to_dict())

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Forget the connection; the player leaves once their last socket is gone."""
        connected_players = current_app.connected_players
        identity = connected_players.pop(request.sid, None)
        if identity is None:
            return

        game_logger.log_user_action(request, 'disconnect', identity.player_id, reason=str(reason))

        still_connected = any(
            other.player_id == identity.player_id for other in connected_players.values()
        )
        engine = get_match_engine()
        if engine and not still_connected:
            engine.leave(identity.player_id)

    @socketio.on('join_match')
    @websocket_identity_required
    def handle_join_match(data=None, identity=None):
        """Rejoin the roster after an explicit leave."""
        game_logger.log_user_action(request, 'join_match', identity.player_id)
        get_match_engine().join(identity.player_id, identity.name)

    @socketio.on('player_ready')
    @websocket_identity_required
    def handle_player_ready(data=None, identity=None):
        game_logger.log_user_action(request, 'player_ready', identity.player_id)
        get_match_engine().set_ready(identity.player_id)

    @socketio.on('move')
    @websocket_identity_required
    def handle_move(data=None, identity=None):
        """Submit a move: {'selection': [central_symbol, hand_symbol]}."""
        engine = get_match_engine()
        selection = data.get('selection') if isinstance(data, dict) else data

        game_logger.log_user_action(request, 'move', identity.player_id, selection=selection)

        outcome = engine.submit_move(identity.player_id, selection)
        emit('move_result', {
            'success': outcome in (MoveOutcome.ACCEPTED, MoveOutcome.WON),
            'outcome': outcome.value
        })

        if outcome == MoveOutcome.REJECTED and current_app.config.get('NOTIFY_UNLOCK'):
            schedule_unlock_notice(socketio, engine, identity.player_id)

    @socketio.on('leave_match')
    @websocket_identity_required
    def handle_leave_match(data=None, identity=None):
        game_logger.log_user_action(request, 'leave_match', identity.player_id)
        get_match_engine().leave(identity.player_id)

    @socketio.on('new_match')
    @websocket_identity_required
    def handle_new_match(data=None, identity=None):
        game_logger.log_user_action(request, 'new_match', identity.player_id)
        get_match_engine().new_match()

    @socketio.on('set_name')
    @websocket_identity_required
    def handle_set_name(data=None, identity=None):
        """Change the display name: {'name': 'Alice'}."""
        name = IdentityService.clean_name(data.get('name') if isinstance(data, dict) else data)
        if not name:
            emit('error', {'error': 'Name is required'})
            return

        current_app.connected_players[request.sid] = Identity(player_id=identity.player_id, name=name)
        game_logger.log_user_action(request, 'set_name', identity.player_id, name=name)
        get_match_engine().rename(identity.player_id, name)

    @socketio.on_error_default
    def handle_error(e):
        game_logger.log_error(request, e, getattr(request, 'event', {}).get('message', 'unknown'))
        emit('error', {'error': str(e)})


def _resolve_identity(auth):
    """Identity from a connect-time token, falling back to the device id cookie."""
    identity_service = get_identity_service()
    token = auth.get('token') if isinstance(auth, dict) else None

    if token and identity_service:
        result = identity_service.verify_token(token)
        if result['success']:
            return result['identity']
        return None

    device_id = get_device_id()
    if device_id:
        return Identity(player_id=device_id)
    return None


def broadcast_state_change(snapshot: MatchSnapshot, socketio):
    """Send a match snapshot to every connected client."""
    socketio.emit('state_change', snapshot.to_dict())


def schedule_unlock_notice(socketio, engine, player_id: str):
    """Tell clients when a player's lockout window is over."""
    player = engine.snapshot().get_player(player_id)
    if player is None or player.timeout_until is None:
        return
    locked_at = player.timeout_until
    delay = engine.timeout_policy.remaining_ms(player) / 1000.0

    def _notify():
        socketio.sleep(delay)
        current = engine.snapshot().get_player(player_id)
        # A later move or a match reset makes this notice stale
        if current is None or current.timeout_until != locked_at:
            return
        socketio.emit('player_unlocked', {'player_id': player_id})

    socketio.start_background_task(_notify)
