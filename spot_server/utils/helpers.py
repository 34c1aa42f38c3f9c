"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional
from flask import current_app, request


def get_device_id(request_obj=None) -> Optional[str]:
    """Read the device id cookie from a request."""
    if request_obj is None:
        request_obj = request

    cookie_name = current_app.config.get('DEVICE_COOKIE_NAME', 'device_id')
    device_id = request_obj.cookies.get(cookie_name)
    return device_id or None


def get_bearer_token(request_obj=None) -> Optional[str]:
    """Extract the token from an 'Authorization: Bearer ...' header."""
    if request_obj is None:
        request_obj = request

    auth_header = request_obj.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1].strip() or None
