"""
Catalog models: artists and their songs.
"""

from datetime import datetime

from sqlalchemy.orm import validates

from app.utils import normalize_text
from .database import db


class Artist(db.Model):
    """Performing artist."""

    __tablename__ = 'artists'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    normalized_name = db.Column(db.String(200), nullable=False, default='', index=True)
    image_url = db.Column(db.String(500), nullable=True)

    songs = db.relationship('Song', back_populates='artist', lazy='dynamic')

    @validates('name')
    def _sync_normalized_name(self, key, value):
        self.normalized_name = normalize_text(value)
        return value

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'imageUrl': self.image_url,
        }


class Song(db.Model):
    """Playable track in the catalog."""

    __tablename__ = 'songs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    normalized_title = db.Column(db.String(300), nullable=False, default='', index=True)
    genre = db.Column(db.String(50), nullable=True, index=True)
    duration_seconds = db.Column(db.Integer, nullable=False, default=0)
    media_url = db.Column(db.String(500), nullable=False)
    image_url = db.Column(db.String(500), nullable=True)
    artist_id = db.Column(
        db.Integer,
        db.ForeignKey('artists.id'),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    artist = db.relationship('Artist', back_populates='songs')

    @validates('title')
    def _sync_normalized_title(self, key, value):
        self.normalized_title = normalize_text(value)
        return value

    def to_dict(self, include_artist=True):
        """Serialize song for API responses."""
        data = {
            'id': self.id,
            'title': self.title,
            'genre': self.genre,
            'duration': self.duration_seconds,
            'url': self.media_url,
            'imageUrl': self.image_url,
            'artistId': self.artist_id,
        }
        if include_artist:
            data['artist'] = self.artist.to_dict() if self.artist else None
        return data
