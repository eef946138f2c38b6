"""
Models package for Tempo.
"""

from .database import db, init_db
from .user import User
from .song import Artist, Song
from .playlist import Playlist, PlaylistSong
from .favorite import Favorite
from .playback import PlaybackEvent
from .revoked_token import RevokedToken

__all__ = [
    'db', 'init_db', 'User', 'Artist', 'Song', 'Playlist', 'PlaylistSong',
    'Favorite', 'PlaybackEvent', 'RevokedToken',
]
