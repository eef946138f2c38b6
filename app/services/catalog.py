"""
Catalog Service - song lookup, search and artist listings.
"""

from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from app.exceptions import NotFound
from app.models import Artist, Song
from app.utils import normalize_text


class CatalogService:
    """Read-only access to artists and songs."""

    def __init__(self, session):
        self.session = session

    def get_song(self, song_id: int) -> Song:
        song = (
            self.session.query(Song)
            .options(joinedload(Song.artist))
            .filter(Song.id == song_id)
            .first()
        )
        if not song:
            raise NotFound('Song not found')
        return song

    def search_songs(self, skip: int, take: int, keyword: str = None, genre: str = None):
        """
        Search songs by title or artist name, ignoring case and diacritics.

        Returns:
            (songs, total) where total counts every match, not just the page
        """
        query = self.session.query(Song).join(Artist, Artist.id == Song.artist_id)

        needle = normalize_text(keyword)
        if needle:
            query = query.filter(or_(
                Song.normalized_title.contains(needle, autoescape=True),
                Artist.normalized_name.contains(needle, autoescape=True),
            ))
        if genre:
            query = query.filter(Song.genre == genre)

        total = query.count()
        if skip >= total:
            return [], total

        songs = (
            query.options(joinedload(Song.artist))
            .order_by(Song.id.asc())
            .offset(skip)
            .limit(take)
            .all()
        )
        return songs, total

    def get_artist(self, artist_id: int) -> Artist:
        artist = self.session.get(Artist, artist_id)
        if not artist:
            raise NotFound('Artist not found')
        return artist

    def list_artist_songs(self, artist_id: int, skip: int, take: int):
        artist = self.get_artist(artist_id)
        query = artist.songs
        total = query.count()
        if skip >= total:
            return [], total
        songs = query.order_by(Song.id.asc()).offset(skip).limit(take).all()
        return songs, total
