"""
User model for authentication.
"""

from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from .database import db


class User(UserMixin, db.Model):
    """Application user identified by a unique username."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(50), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    favorites = db.relationship(
        'Favorite',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )
    playlists = db.relationship(
        'Playlist',
        back_populates='owner',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )

    def set_password(self, password):
        """Hash and store password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verify password against stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Serialize user for API responses. Never expose password_hash."""
        return {
            'id': self.id,
            'name': self.name,
            'username': self.username,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
