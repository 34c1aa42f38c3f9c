"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

from .game_settings import HAND_SIZE, TURNS_TO_WIN, LOCKOUT_DURATION_MS, MIN_PLAYERS_TO_PLAY

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3300))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Identity Settings
    IDENTITY_SECRET = os.getenv('IDENTITY_SECRET', 'dev-identity-secret-change-in-production')
    IDENTITY_TOKEN_DAYS = int(os.getenv('IDENTITY_TOKEN_DAYS', 365))
    DEVICE_COOKIE_NAME = os.getenv('DEVICE_COOKIE_NAME', 'device_id')

    # Game Settings
    HAND_SIZE = int(os.getenv('HAND_SIZE', HAND_SIZE))
    TURNS_TO_WIN = int(os.getenv('TURNS_TO_WIN', TURNS_TO_WIN))
    LOCKOUT_DURATION_MS = int(os.getenv('LOCKOUT_DURATION_MS', LOCKOUT_DURATION_MS))
    MIN_PLAYERS = int(os.getenv('MIN_PLAYERS', MIN_PLAYERS_TO_PLAY))
    NOTIFY_UNLOCK = os.getenv('NOTIFY_UNLOCK', 'True').lower() == 'true'

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    NOTIFY_UNLOCK = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
