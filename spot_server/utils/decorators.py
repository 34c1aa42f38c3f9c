"""
Identity Decorators

Contains decorators resolving the calling player for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import current_app, request, jsonify
from flask_socketio import emit

from .helpers import get_bearer_token


def require_identity(f):
    """
    Decorator requiring a valid identity token on HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.identity_service import get_identity_service

        identity_service = get_identity_service()
        if not identity_service:
            return jsonify({
                'success': False,
                'error': 'Identity service unavailable'
            }), 500

        token = get_bearer_token()
        if not token:
            return jsonify({
                'success': False,
                'error': 'Identity token required'
            }), 401

        result = identity_service.verify_token(token)
        if not result['success']:
            return jsonify({
                'success': False,
                'error': result['error']
            }), 401

        request.identity = result['identity']
        return f(*args, **kwargs)

    return decorated_function


def websocket_identity_required(f):
    """Decorator for WebSocket events from identified connections."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        connected_players = getattr(current_app, 'connected_players', {})
        identity = connected_players.get(request.sid)

        if identity is None:
            emit('error', {'error': 'Identity required'})
            return

        kwargs['identity'] = identity
        return f(*args, **kwargs)

    return decorated_function
