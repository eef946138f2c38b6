"""
Routes package for Tempo.
Registers all Flask blueprints.
"""

from .api import bp as api_bp
from .playlists import bp as playlists_bp
from .songs import bp as songs_bp
from .users import bp as users_bp

__all__ = ['api_bp', 'playlists_bp', 'songs_bp', 'users_bp']
