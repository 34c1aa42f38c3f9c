"""
Identity Service

Issues and verifies signed identity tokens bound to a device id. The match
engine trusts whatever player id comes out of here; there are no accounts
or passwords.
"""

import datetime
import uuid
from typing import Any, Dict, Optional

import jwt
from flask import current_app

from ..models.identity import Identity

MAX_NAME_LENGTH = 32


class IdentityService:
    """
    Identity provider for connecting players.
    """

    def __init__(self, secret: str, token_days: int = 365):
        """
        Args:
            secret: Secret key for JWT signing
            token_days: Token lifetime in days
        """
        if not secret:
            raise ValueError("Identity secret is required")
        self.secret = secret
        self.token_days = token_days

    @staticmethod
    def new_device_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def clean_name(name: Any) -> Optional[str]:
        """Trim a display name; None when there is nothing usable."""
        if not isinstance(name, str):
            return None
        name = name.strip()[:MAX_NAME_LENGTH]
        return name or None

    def issue_token(self, device_id: Optional[str] = None, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a token for a device.

        Args:
            device_id: Existing device id, a new one is generated when missing
            name: Optional display name carried in the token

        Returns:
            Dictionary with success status, token and identity
        """
        player_id = device_id or self.new_device_id()
        display_name = self.clean_name(name)

        token_payload = {
            "player_id": player_id,
            "name": display_name,
            "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=self.token_days)
        }
        token = jwt.encode(token_payload, self.secret, algorithm="HS256")

        return {
            "success": True,
            "token": token,
            "identity": Identity(player_id=player_id, name=display_name)
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an identity token.

        Args:
            token: JWT token string

        Returns:
            Dictionary with success status and identity or error
        """
        try:
            if not token:
                return {"success": False, "error": "Token is required"}

            payload = jwt.decode(token, self.secret, algorithms=["HS256"])
            player_id = payload.get("player_id")

            if not player_id or not isinstance(player_id, str):
                return {"success": False, "error": "Invalid token payload"}

            return {
                "success": True,
                "identity": Identity(player_id=player_id, name=self.clean_name(payload.get("name")))
            }

        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}


def get_identity_service() -> Optional[IdentityService]:
    """Get the identity service owned by the current application."""
    return getattr(current_app, 'identity_service', None)
