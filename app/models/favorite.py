"""
Favorite model - tracks which users favorited which songs.
"""

from datetime import datetime

from .database import db


class Favorite(db.Model):
    """User's favorite mark on a song."""

    __tablename__ = 'favorites'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'song_id', name='uq_favorite'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    song_id = db.Column(
        db.Integer,
        db.ForeignKey('songs.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship('User', back_populates='favorites')
    song = db.relationship('Song')

    def to_dict(self):
        return {
            'userId': self.user_id,
            'songId': self.song_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
