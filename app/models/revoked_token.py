"""
Revoked access token model (logout blacklist).
"""

import hashlib
from datetime import datetime

from .database import db


class RevokedToken(db.Model):
    """Access token invalidated before its natural expiry."""

    __tablename__ = 'revoked_tokens'

    id = db.Column(db.Integer, primary_key=True)
    token_hash = db.Column(db.String(64), nullable=False, unique=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    revoked_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @staticmethod
    def hash_token(token):
        """Hash a plain token for storage."""
        return hashlib.sha256(token.encode('utf-8')).hexdigest()

    @classmethod
    def is_revoked(cls, token, now=None):
        """True while a matching entry exists and has not outlived the token."""
        now = now or datetime.utcnow()
        entry = cls.query.filter_by(token_hash=cls.hash_token(token)).first()
        if not entry:
            return False
        return entry.expires_at > now
