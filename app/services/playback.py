"""
Playback Service - record listens and browse a user's history.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFound
from app.models import PlaybackEvent, Song

logger = logging.getLogger(__name__)


class PlaybackService:
    """Keeps at most one live playback event per (user, song)."""

    def __init__(self, session):
        self.session = session

    def _find(self, user_id, song_id):
        return (
            self.session.query(PlaybackEvent)
            .filter_by(user_id=user_id, song_id=song_id)
            .first()
        )

    def record_play(self, user_id: int, song_id: int, now: datetime = None) -> PlaybackEvent:
        """
        Record that a user played a song.

        A replay moves the existing event's ``played_at`` forward instead of
        inserting a second row.
        """
        if not self.session.get(Song, song_id):
            raise NotFound('Song not found')

        now = now or datetime.utcnow()
        event = self._find(user_id, song_id)
        if event:
            event.played_at = now
            self.session.commit()
            return event

        event = PlaybackEvent(user_id=user_id, song_id=song_id, played_at=now)
        self.session.add(event)
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            self.session.rollback()
            event = self._find(user_id, song_id)
            event.played_at = now
            self.session.commit()
        logger.debug('User %s played song %s', user_id, song_id)
        return event

    def history(self, user_id: int, skip: int, take: int):
        """Return (events, total) for one page of history, most recent first."""
        query = self.session.query(PlaybackEvent).filter_by(user_id=user_id)
        total = query.count()
        if skip >= total:
            return [], total
        events = (
            query.order_by(PlaybackEvent.played_at.desc(), PlaybackEvent.id.desc())
            .offset(skip)
            .limit(take)
            .all()
        )
        return events, total
