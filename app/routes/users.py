"""
User Routes - profile, favorites and playback history.
"""

from flask import Blueprint, request
from flask_login import login_required, current_user

from app.models import db
from app.services import FavoriteService, PlaybackService
from app.services.pagination import build_page, parse_pagination_params
from app.utils import parse_positive_int, respond

bp = Blueprint('users', __name__)


@bp.route('/users', methods=['GET'])
@login_required
def profile():
    """Get current user profile."""
    return respond(current_user.to_dict())


# ==================== Favorites ====================

@bp.route('/users/favorites', methods=['GET'])
@login_required
def list_favorites():
    paging = parse_pagination_params(request.args)
    songs, total = FavoriteService(db.session).list(current_user.id, paging.skip, paging.take)
    return respond(page=build_page(songs, total, paging.take, paging.current_page))


@bp.route('/users/favorites/<song_id>', methods=['POST'])
@login_required
def add_favorite(song_id):
    favorite = FavoriteService(db.session).add(
        current_user.id, parse_positive_int(song_id, 'song id'),
    )
    return respond(favorite.to_dict(), message='Song added to favorites', status_code=201)


@bp.route('/users/favorites/<song_id>', methods=['DELETE'])
@login_required
def remove_favorite(song_id):
    removed = FavoriteService(db.session).remove(
        current_user.id, parse_positive_int(song_id, 'song id'),
    )
    return respond(removed, message='Song removed from favorites')


# ==================== Playback History ====================

@bp.route('/users/history', methods=['GET'])
@login_required
def playback_history():
    """Songs the current user played recently, most recent first."""
    paging = parse_pagination_params(request.args)
    events, total = PlaybackService(db.session).history(current_user.id, paging.skip, paging.take)
    page = build_page([e.to_dict() for e in events], total, paging.take, paging.current_page)
    return respond(page=page)
