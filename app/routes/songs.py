"""
Song Routes - catalog browsing, search, listens and rankings.
"""

from datetime import datetime, timedelta

from flask import Blueprint, request
from flask_login import current_user, login_required

from app.exceptions import InvalidArgument
from app.models import db
from app.services import CatalogService, PlaybackService, RankingService
from app.services.pagination import build_page, parse_pagination_params
from app.utils import parse_digits, parse_positive_int, respond

bp = Blueprint('songs', __name__)


def _window_since():
    """Optional ``days`` query parameter -> start of the recency window."""
    raw = request.args.get('days')
    if raw is None:
        return None

    message = 'Days must be a positive integer if provided.'
    days = parse_digits(raw, message)
    if days < 1:
        raise InvalidArgument(message)
    try:
        return datetime.utcnow() - timedelta(days=days)
    except (OverflowError, ValueError):
        raise InvalidArgument('Days is out of range')


# ==================== Catalog ====================

@bp.route('/songs', methods=['GET'])
@login_required
def list_songs():
    """Search the catalog by keyword and/or genre."""
    paging = parse_pagination_params(request.args)
    keyword = request.args.get('keyword', '').strip()
    genre = request.args.get('genre', '').strip() or None

    songs, total = CatalogService(db.session).search_songs(
        paging.skip, paging.take, keyword=keyword, genre=genre,
    )
    page = build_page([s.to_dict() for s in songs], total, paging.take, paging.current_page)
    return respond(page=page)


@bp.route('/songs/<song_id>', methods=['GET'])
@login_required
def get_song(song_id):
    song = CatalogService(db.session).get_song(parse_positive_int(song_id, 'song id'))
    return respond(song.to_dict())


@bp.route('/songs/<song_id>/play', methods=['POST'])
@login_required
def play_song(song_id):
    """Record a listen event for the current user."""
    event = PlaybackService(db.session).record_play(
        current_user.id, parse_positive_int(song_id, 'song id'),
    )
    return respond(event.to_dict(), message='Playback recorded', status_code=201)


@bp.route('/artists/<artist_id>', methods=['GET'])
@login_required
def get_artist(artist_id):
    artist = CatalogService(db.session).get_artist(parse_positive_int(artist_id, 'artist id'))
    return respond(artist.to_dict())


@bp.route('/artists/<artist_id>/songs', methods=['GET'])
@login_required
def list_artist_songs(artist_id):
    artist_id = parse_positive_int(artist_id, 'artist id')
    paging = parse_pagination_params(request.args)
    songs, total = CatalogService(db.session).list_artist_songs(artist_id, paging.skip, paging.take)
    page = build_page([s.to_dict() for s in songs], total, paging.take, paging.current_page)
    return respond(page=page)


# ==================== Rankings ====================

@bp.route('/songs/top', methods=['GET'])
@login_required
def top_songs():
    """Most listened songs overall, optionally within the last N days."""
    paging = parse_pagination_params(request.args)
    ranked = RankingService(db.session).rank_songs(
        paging.skip, paging.take, since=_window_since(),
    )
    page = build_page([r.to_dict() for r in ranked.rows], ranked.total, paging.take, paging.current_page)
    return respond(page=page)


@bp.route('/songs/genres', methods=['GET'])
@login_required
def list_genres():
    return respond(RankingService(db.session).list_genres())


@bp.route('/songs/genres/top', methods=['GET'])
@login_required
def top_genres():
    """Genres ordered by total listens on their songs."""
    paging = parse_pagination_params(request.args)
    ranked = RankingService(db.session).rank_genres(
        paging.skip, paging.take, since=_window_since(),
    )
    page = build_page([r.to_dict() for r in ranked.rows], ranked.total, paging.take, paging.current_page)
    return respond(page=page)


@bp.route('/songs/genres/<genre>/top', methods=['GET'])
@login_required
def top_songs_by_genre(genre):
    """Most listened songs within one genre."""
    genre = genre.strip()
    if not genre:
        raise InvalidArgument('Genre is required')

    paging = parse_pagination_params(request.args)
    ranked = RankingService(db.session).rank_songs_by_genre(
        genre, paging.skip, paging.take, since=_window_since(),
    )
    page = build_page([r.to_dict() for r in ranked.rows], ranked.total, paging.take, paging.current_page)
    return respond(page=page)
