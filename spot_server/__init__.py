"""
Spot-Match Game Server Application Package

This package contains a server-authoritative implementation of a
spot-the-common-symbol multiplayer game, delivered over Socket.IO.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config
from .models.game import MatchConfig


def create_app(config_class=Config, engine=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        engine: Optional pre-built MatchEngine, one is created from the config otherwise

    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    from .services.identity_service import IdentityService
    from .services.match_service import MatchEngine

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app, supports_credentials=True, origins=app.config.get('CORS_ORIGINS', '*'))
    socketio = SocketIO(app, cors_allowed_origins=app.config.get('CORS_ORIGINS', '*'),
                        logger=False, engineio_logger=False)

    # One match per process, owned by the app
    app.match_engine = engine or MatchEngine(MatchConfig.from_app_config(app.config))
    app.identity_service = IdentityService(
        app.config['IDENTITY_SECRET'], app.config.get('IDENTITY_TOKEN_DAYS', 365)
    )
    app.connected_players = {}  # socket sid -> Identity

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.identity_controller import identity_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(identity_bp, url_prefix='/api')

    # Register WebSocket handlers and push every snapshot to all clients
    from .websocket.handlers import register_websocket_handlers, broadcast_state_change
    register_websocket_handlers(socketio)
    app.unsubscribe_broadcast = app.match_engine.subscribe(
        lambda snapshot: broadcast_state_change(snapshot, socketio)
    )

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
