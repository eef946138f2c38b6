"""
Services package for Tempo.
"""

from .catalog import CatalogService
from .membership import FavoriteService, PlaylistService
from .playback import PlaybackService
from .ranking import RankingService

__all__ = [
    'CatalogService', 'FavoriteService', 'PlaylistService',
    'PlaybackService', 'RankingService',
]
