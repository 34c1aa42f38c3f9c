"""
Game Controller

Handles the match-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.match_service import get_match_engine
from ..utils.decorators import require_identity
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


@game_bp.route('/match/state', methods=['GET'])
def get_state():
    """Get the current match snapshot."""
    try:
        engine = get_match_engine()
        if not engine:
            return jsonify({
                'success': False,
                'error': 'Match engine unavailable'
            }), 500

        game_logger.log_user_action(request, 'get_state')

        response_data = {
            'success': True,
            'state': engine.snapshot().to_dict()
        }
        game_logger.log_server_response(request, 'get_state', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/match/new', methods=['POST'])
@require_identity
def new_match():
    """Reset the match, keeping every player on the roster."""
    try:
        engine = get_match_engine()
        if not engine:
            return jsonify({
                'success': False,
                'error': 'Match engine unavailable'
            }), 500

        player_id = request.identity.player_id
        game_logger.log_user_action(request, 'new_match', player_id)

        engine.new_match()

        response_data = {
            'success': True,
            'state': engine.snapshot().to_dict()
        }
        game_logger.log_server_response(request, 'new_match', True, response_data, player_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_match')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_match', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        engine = get_match_engine()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'phase': engine.phase.value if engine else None,
            'players_count': engine.player_count if engine else 0,
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
