"""
Tests for listen-count rankings.

Covers:
  - rank_groups ordering, tie-break and totals
  - Song ranking: order, deterministic ties, page coverage, totals
  - Genre-scoped ranking and unknown genres
  - Recency window
  - Genre listing and genre ranking
"""

import os
import sys
from datetime import datetime, timedelta

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.services.pagination import build_page
from app.services.ranking import rank_groups


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope='module')
def app():
    """Create a fresh app with an in-memory database."""
    os.environ['SECRET_KEY'] = 'test-secret-key-ranking'

    from config import config
    config.SQLALCHEMY_DATABASE_URI = 'sqlite://'

    from app import create_app
    application = create_app(testing=True)
    yield application


@pytest.fixture(scope='module')
def catalog(app):
    """
    Songs 7 (Rock), 3 (Pop), 9 (Pop) with 5, 2 and 2 listeners.

    Three of song 7's listens are ten days old; every other listen is recent.
    Songs 11 (Jazz) and 12 (no genre) are never played.
    """
    with app.app_context():
        from app.models import db, Artist, PlaybackEvent, Song, User

        users = []
        for i in range(1, 6):
            user = User(name=f'Listener {i}', username=f'listener{i}')
            user.set_password('listenerpass')
            db.session.add(user)
            users.append(user)

        artist = Artist(name='Test Artist')
        db.session.add(artist)
        for song_id, genre in [(3, 'Pop'), (7, 'Rock'), (9, 'Pop'), (11, 'Jazz'), (12, None)]:
            db.session.add(Song(
                id=song_id,
                title=f'Song {song_id}',
                genre=genre,
                duration_seconds=200,
                media_url=f'/songs/{song_id}.mp3',
                artist=artist,
            ))
        db.session.commit()

        now = datetime.utcnow()
        old = now - timedelta(days=10)
        plays = [
            (users[0], 7, old), (users[1], 7, old), (users[2], 7, old),
            (users[3], 7, now), (users[4], 7, now),
            (users[0], 3, now), (users[1], 3, now),
            (users[2], 9, now), (users[3], 9, now),
        ]
        for user, song_id, played_at in plays:
            db.session.add(PlaybackEvent(user_id=user.id, song_id=song_id, played_at=played_at))
        db.session.commit()
    return app


@pytest.fixture
def ranking(catalog):
    with catalog.app_context():
        from app.models import db
        from app.services import RankingService
        yield RankingService(db.session)


def _ids(page):
    return [row.song.id for row in page.rows]


def _counts(page):
    return [row.listen_count for row in page.rows]


# ===========================================================================
# 1. Pure grouping core
# ===========================================================================

class TestRankGroups:
    def test_orders_by_count_desc(self):
        page, total = rank_groups([(1, 2), (2, 9), (3, 5)], skip=0, take=10)
        assert page == [(2, 9), (3, 5), (1, 2)]
        assert total == 3

    def test_ties_broken_by_key_ascending(self):
        page, _ = rank_groups([(9, 2), (7, 5), (3, 2)], skip=0, take=10)
        assert page == [(7, 5), (3, 2), (9, 2)]

    def test_total_ignores_slice(self):
        groups = [(i, i % 3) for i in range(1, 11)]
        for skip, take in [(0, 1), (3, 4), (20, 5)]:
            _, total = rank_groups(groups, skip=skip, take=take)
            assert total == 10

    def test_slice_past_end_is_empty(self):
        page, total = rank_groups([(1, 1)], skip=5, take=5)
        assert page == []
        assert total == 1

    def test_empty_input(self):
        assert rank_groups([], skip=0, take=10) == ([], 0)


# ===========================================================================
# 2. Song ranking
# ===========================================================================

class TestRankSongs:
    def test_first_page_of_two(self, ranking):
        page = ranking.rank_songs(skip=0, take=2)
        assert _ids(page) == [7, 3]
        assert _counts(page) == [5, 2]
        assert page.total == 3
        assert build_page(page.rows, page.total, 2, 1)['totalPages'] == 2

    def test_tie_break_is_stable_across_calls(self, ranking):
        first = _ids(ranking.rank_songs(skip=0, take=3))
        for _ in range(5):
            assert _ids(ranking.rank_songs(skip=0, take=3)) == first
        assert first == [7, 3, 9]

    def test_second_page(self, ranking):
        page = ranking.rank_songs(skip=2, take=2)
        assert _ids(page) == [9]
        assert page.total == 3

    def test_counts_never_increase_down_the_page(self, ranking):
        counts = _counts(ranking.rank_songs(skip=0, take=20))
        assert counts == sorted(counts, reverse=True)

    def test_pages_cover_full_ranking(self, ranking):
        full = _ids(ranking.rank_songs(skip=0, take=20))
        collected = []
        for skip in range(0, 3, 1):
            collected.extend(_ids(ranking.rank_songs(skip=skip, take=1)))
        assert collected == full
        assert len(set(collected)) == len(collected)

    def test_total_counts_songs_not_events(self, ranking):
        for skip, take in [(0, 1), (1, 1), (0, 20), (10, 5)]:
            assert ranking.rank_songs(skip=skip, take=take).total == 3

    def test_rows_are_hydrated_with_artist(self, ranking):
        row = ranking.rank_songs(skip=0, take=1).rows[0]
        data = row.to_dict()
        assert data['id'] == 7
        assert data['listenCount'] == 5
        assert data['artist']['name'] == 'Test Artist'

    def test_page_past_end(self, ranking):
        page = ranking.rank_songs(skip=100, take=10)
        assert page.rows == []
        assert page.total == 3

    def test_recency_window(self, ranking):
        since = datetime.utcnow() - timedelta(days=7)
        page = ranking.rank_songs(skip=0, take=10, since=since)
        assert _ids(page) == [3, 7, 9]
        assert _counts(page) == [2, 2, 2]

    def test_window_with_no_events(self, ranking):
        page = ranking.rank_songs(skip=0, take=10, since=datetime.utcnow() + timedelta(days=1))
        assert page.rows == []
        assert page.total == 0


# ===========================================================================
# 3. Genre-scoped ranking
# ===========================================================================

class TestRankSongsByGenre:
    def test_pop(self, ranking):
        page = ranking.rank_songs_by_genre('Pop', skip=0, take=10)
        assert _ids(page) == [3, 9]
        assert page.total == 2

    def test_rock(self, ranking):
        page = ranking.rank_songs_by_genre('Rock', skip=0, take=10)
        assert _ids(page) == [7]
        assert _counts(page) == [5]

    def test_genre_without_plays(self, ranking):
        page = ranking.rank_songs_by_genre('Jazz', skip=0, take=10)
        assert page.rows == []
        assert page.total == 0

    def test_unknown_genre_is_not_an_error(self, ranking):
        page = ranking.rank_songs_by_genre('Polka', skip=0, take=10)
        assert page.total == 0


# ===========================================================================
# 4. Genres
# ===========================================================================

class TestGenres:
    def test_list_genres_excludes_missing(self, ranking):
        assert ranking.list_genres() == ['Jazz', 'Pop', 'Rock']

    def test_rank_genres(self, ranking):
        page = ranking.rank_genres(skip=0, take=10)
        assert [row.to_dict() for row in page.rows] == [
            {'genre': 'Rock', 'listenCount': 5},
            {'genre': 'Pop', 'listenCount': 4},
        ]
        assert page.total == 2

    def test_rank_genres_in_window(self, ranking):
        since = datetime.utcnow() - timedelta(days=7)
        page = ranking.rank_genres(skip=0, take=10, since=since)
        assert [(row.genre, row.listen_count) for row in page.rows] == [('Pop', 4), ('Rock', 2)]

    def test_rank_genres_paged(self, ranking):
        page = ranking.rank_genres(skip=1, take=1)
        assert [row.genre for row in page.rows] == ['Pop']
        assert page.total == 2
