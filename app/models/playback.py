"""
Playback history model - one live listen event per (user, song).
"""

from datetime import datetime

from .database import db


class PlaybackEvent(db.Model):
    """Most recent time a user played a song."""

    __tablename__ = 'playback_history'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'song_id', name='uq_playback_user_song'),
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
    played_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    song = db.relationship('Song')

    def to_dict(self):
        return {
            'id': self.id,
            'songId': self.song_id,
            'playedAt': self.played_at.isoformat() if self.played_at else None,
            'song': self.song.to_dict() if self.song else None,
        }
