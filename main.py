"""
Spot-Match Game Server - Main Entry Point

This is the main entry point for the game server.
It creates the Flask-SocketIO application with its match engine and starts serving.
"""

import os

from spot_server import create_app
from spot_server.config import config, validate_symbol_catalog_integrity
from spot_server.utils.game_logger import game_logger


def main():
    """Main function to validate settings and start the server."""
    config_class = config.get(os.getenv('APP_ENV', 'default'), config['default'])

    try:
        print("Validating game settings...")
        validate_symbol_catalog_integrity(config_class.HAND_SIZE)
        print("✓ Symbol catalog is valid for the configured hand size")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        match_config = app.match_engine.config
        game_logger.logger.info(
            f"Spot-Match Server Starting - hand_size={match_config.hand_size} "
            f"turns_to_win={match_config.turns_to_win} lockout_ms={match_config.lockout_duration_ms} "
            f"min_players={match_config.min_players}"
        )

        print(f"\nStarting Spot-Match Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Spot-Match Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
