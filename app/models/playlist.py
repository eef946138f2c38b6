"""
Playlist models for grouping catalog songs.
"""

from datetime import datetime

from .database import db


class Playlist(db.Model):
    """User-created playlist; names are unique per owner."""

    __tablename__ = 'playlists'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_playlist_owner_name'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, index=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    songs = db.relationship(
        'PlaylistSong',
        back_populates='playlist',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )
    owner = db.relationship('User', back_populates='playlists')

    def to_dict(self):
        """Serialize playlist for API responses."""
        return {
            'id': self.id,
            'name': self.name,
            'userId': self.user_id,
            'songCount': self.songs.count(),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class PlaylistSong(db.Model):
    """Membership of a song in a playlist."""

    __tablename__ = 'playlist_songs'
    __table_args__ = (
        db.UniqueConstraint('playlist_id', 'song_id', name='uq_playlist_song'),
    )

    id = db.Column(db.Integer, primary_key=True)
    playlist_id = db.Column(
        db.Integer,
        db.ForeignKey('playlists.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    song_id = db.Column(
        db.Integer,
        db.ForeignKey('songs.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    playlist = db.relationship('Playlist', back_populates='songs')
    song = db.relationship('Song')

    def to_dict(self):
        return {
            'playlistId': self.playlist_id,
            'songId': self.song_id,
            'addedAt': self.added_at.isoformat() if self.added_at else None,
        }
