"""
Retention Service - daily cleanup of old playback history.

The sweep runs on a single daemon thread that sleeps until the next
configured hour (UTC) and then deletes playback events older than the
retention threshold, plus revoked-token entries whose tokens have expired.
A failing sweep is logged; the thread keeps going and tries again the next
day.
"""

import logging
import threading
from datetime import datetime, timedelta

from app.models import PlaybackEvent, RevokedToken

logger = logging.getLogger(__name__)


def sweep_playback_history(session, retention_days: int, now: datetime = None) -> int:
    """
    Delete playback events played before ``now - retention_days``.

    Returns:
        Number of deleted rows
    """
    now = now or datetime.utcnow()
    cutoff = now - timedelta(days=retention_days)
    deleted = (
        session.query(PlaybackEvent)
        .filter(PlaybackEvent.played_at < cutoff)
        .delete(synchronize_session=False)
    )
    session.commit()
    logger.info('Deleted %d playback events older than %s', deleted, cutoff.isoformat())
    return deleted


def purge_expired_tokens(session, now: datetime = None) -> int:
    """Drop revocation entries for tokens that have expired on their own."""
    now = now or datetime.utcnow()
    deleted = (
        session.query(RevokedToken)
        .filter(RevokedToken.expires_at <= now)
        .delete(synchronize_session=False)
    )
    session.commit()
    return deleted


def seconds_until_next_run(now: datetime, hour: int) -> float:
    """Seconds from ``now`` until the next ``hour``:00."""
    next_run = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


class RetentionScheduler:
    """Background thread that runs the retention sweep once a day."""

    def __init__(self, app, hour: int = 0, retention_days: int = 7):
        self.app = app
        self.hour = hour
        self.retention_days = retention_days
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name='retention-sweep',
            daemon=True,
        )
        self._thread.start()
        logger.info('Retention sweep scheduled daily at %02d:00 UTC (%d days)', self.hour, self.retention_days)

    def stop(self):
        self._stop.set()

    def run_once(self) -> int:
        """Run one sweep inside an app context; failures are logged, not raised."""
        with self.app.app_context():
            from app.models import db
            try:
                deleted = sweep_playback_history(db.session, self.retention_days)
                purge_expired_tokens(db.session)
                return deleted
            except Exception:
                db.session.rollback()
                logger.exception('Playback history cleanup failed')
                return 0

    def _loop(self):
        while not self._stop.wait(seconds_until_next_run(datetime.utcnow(), self.hour)):
            logger.info('Running daily playback history cleanup...')
            self.run_once()
