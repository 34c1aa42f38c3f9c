"""
Identity Controller

Hands out device ids and identity tokens.
"""

from flask import Blueprint, current_app, request, jsonify
from ..services.identity_service import get_identity_service
from ..utils.game_logger import game_logger
from ..utils.helpers import get_device_id

identity_bp = Blueprint('identity', __name__)

DEVICE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # 1 year


@identity_bp.route('/identity', methods=['GET', 'POST'])
def issue_identity():
    """Ensure a device id cookie and return a token for it."""
    try:
        identity_service = get_identity_service()
        if not identity_service:
            return jsonify({
                'success': False,
                'error': 'Identity service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        name = data.get('name')
        if name is not None and not identity_service.clean_name(name):
            error_response = {
                'success': False,
                'error': 'Name must be a non-empty string'
            }
            game_logger.log_server_response(request, 'issue_identity', False, error_response)
            return jsonify(error_response), 400

        device_id = get_device_id()
        game_logger.log_user_action(request, 'issue_identity', device_id, new_device=device_id is None)

        result = identity_service.issue_token(device_id, name)
        identity = result['identity']

        response_data = {
            'success': True,
            'token': result['token'],
            'player_id': identity.player_id,
            'name': identity.name
        }
        game_logger.log_server_response(request, 'issue_identity', True, response_data, identity.player_id)

        response = jsonify(response_data)
        if device_id is None:
            response.set_cookie(
                current_app.config.get('DEVICE_COOKIE_NAME', 'device_id'),
                identity.player_id,
                max_age=DEVICE_COOKIE_MAX_AGE,
                httponly=True,
                samesite='Lax'
            )
        return response

    except Exception as e:
        game_logger.log_error(request, e, 'issue_identity')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'issue_identity', False, error_response)
        return jsonify(error_response), 500
