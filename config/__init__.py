"""
Configuration Module for Tempo.
Centralizes all app settings with environment variable support.
"""

import hashlib
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name, default):
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Application configuration with sensible defaults."""

    # Paths
    BASE_DIR = Path(__file__).parent.parent
    DATABASE_PATH = BASE_DIR / 'tempo.db'

    # Flask: stable fallback key derived from the DB path so it survives restarts
    _fallback_key = hashlib.sha256(
        f'tempo-secret-{Path(__file__).parent.parent / "tempo.db"}'.encode()
    ).hexdigest()
    SECRET_KEY = os.getenv('SECRET_KEY', _fallback_key)
    DEBUG = _env_bool('FLASK_DEBUG', 'false')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', f'sqlite:///{DATABASE_PATH}')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Access tokens
    JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)
    JWT_TTL_MINUTES = int(os.getenv('JWT_TTL_MINUTES', '60'))

    # Pagination
    PAGE_DEFAULT_LIMIT = int(os.getenv('PAGE_DEFAULT_LIMIT', '10'))
    PAGE_MAX_LIMIT = int(os.getenv('PAGE_MAX_LIMIT', '20'))

    # Playback history retention
    PLAYBACK_RETENTION_DAYS = int(os.getenv('PLAYBACK_RETENTION_DAYS', '7'))
    RETENTION_SWEEP_ENABLED = _env_bool('RETENTION_SWEEP_ENABLED', 'true')
    RETENTION_SWEEP_HOUR = int(os.getenv('RETENTION_SWEEP_HOUR', '0'))


# Create default instance
config = Config()
