"""
Ranking Service - listen-count rankings of songs and genres.

Rankings are computed over the whole matching event population before any
slicing: events are grouped and counted first, the groups are ordered, and
only then is the requested page cut out. Paginating raw events instead would
bias pages towards songs with many events.
"""

import logging
from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from app.models import PlaybackEvent, Song

logger = logging.getLogger(__name__)


class RankedSong(NamedTuple):
    song: Song
    listen_count: int

    def to_dict(self) -> dict:
        data = self.song.to_dict()
        data['listenCount'] = self.listen_count
        return data


class RankedGenre(NamedTuple):
    genre: str
    listen_count: int

    def to_dict(self) -> dict:
        return {'genre': self.genre, 'listenCount': self.listen_count}


class RankedPage(NamedTuple):
    rows: list
    total: int


def rank_groups(groups: Iterable[Tuple], skip: int, take: int) -> Tuple[List[Tuple], int]:
    """
    Order (key, count) groups and cut one page out of them.

    Groups are sorted by count descending; equal counts fall back to the key
    ascending so repeated calls return identical pages.

    Returns:
        (page, total) where total is the number of groups, not events
    """
    ordered = sorted(groups, key=lambda group: (-group[1], group[0]))
    return ordered[skip:skip + take], len(ordered)


class RankingService:
    """Aggregate playback events into ranked, paginated results."""

    def __init__(self, session):
        self.session = session

    def _song_counts(self, genre: Optional[str] = None, since: Optional[datetime] = None):
        query = self.session.query(
            PlaybackEvent.song_id,
            func.count(PlaybackEvent.id),
        )
        if genre is not None:
            query = query.join(Song, Song.id == PlaybackEvent.song_id).filter(Song.genre == genre)
        if since is not None:
            query = query.filter(PlaybackEvent.played_at >= since)
        return [(song_id, count) for song_id, count in query.group_by(PlaybackEvent.song_id).all()]

    def rank_songs(self, skip: int, take: int, genre: Optional[str] = None,
                   since: Optional[datetime] = None) -> RankedPage:
        """
        Rank songs by listen count, optionally within a genre and time window.

        Args:
            skip: Number of ranked songs to skip
            take: Page size
            genre: Only count events for songs of this genre
            since: Only count events played at or after this time

        Returns:
            RankedPage of RankedSong rows and the number of distinct songs
            with at least one matching event
        """
        page, total = rank_groups(self._song_counts(genre, since), skip, take)
        if not page:
            return RankedPage(rows=[], total=total)

        counts = dict(page)
        songs = (
            self.session.query(Song)
            .options(joinedload(Song.artist))
            .filter(Song.id.in_(list(counts)))
            .all()
        )

        # Bulk fetch by id does not preserve the requested order
        rows = [RankedSong(song=song, listen_count=counts[song.id]) for song in songs]
        rows.sort(key=lambda row: (-row.listen_count, row.song.id))

        logger.debug('Ranked %d songs (genre=%s, since=%s), page size %d', total, genre, since, len(rows))
        return RankedPage(rows=rows, total=total)

    def rank_songs_by_genre(self, genre: str, skip: int, take: int,
                            since: Optional[datetime] = None) -> RankedPage:
        """Rank songs of a single genre; an unknown genre yields an empty page."""
        return self.rank_songs(skip, take, genre=genre, since=since)

    def list_genres(self) -> List[str]:
        """Return the distinct non-empty genres present in the catalog."""
        rows = (
            self.session.query(Song.genre)
            .filter(Song.genre.isnot(None), Song.genre != '')
            .distinct()
            .all()
        )
        return sorted(genre for (genre,) in rows)

    def rank_genres(self, skip: int, take: int, since: Optional[datetime] = None) -> RankedPage:
        """Rank genres by the number of listen events on their songs."""
        query = (
            self.session.query(Song.genre, func.count(PlaybackEvent.id))
            .join(PlaybackEvent, PlaybackEvent.song_id == Song.id)
            .filter(Song.genre.isnot(None), Song.genre != '')
        )
        if since is not None:
            query = query.filter(PlaybackEvent.played_at >= since)

        groups = [(genre, count) for genre, count in query.group_by(Song.genre).all()]
        page, total = rank_groups(groups, skip, take)
        rows = [RankedGenre(genre=genre, listen_count=count) for genre, count in page]
        return RankedPage(rows=rows, total=total)
