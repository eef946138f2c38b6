"""
Playlist Routes - CRUD and song management for the current user's playlists.
"""

from flask import Blueprint, request
from flask_login import login_required, current_user

from app.models import db
from app.services import PlaylistService
from app.services.pagination import build_page, parse_pagination_params
from app.utils import json_body, parse_positive_int, respond

bp = Blueprint('playlists', __name__)


# ==================== Playlist CRUD ====================

@bp.route('/playlists', methods=['GET'])
@login_required
def list_playlists():
    """Return playlists owned by the current user."""
    paging = parse_pagination_params(request.args)
    playlists, total = PlaylistService(db.session).list_for_user(
        current_user.id, paging.skip, paging.take,
    )
    return respond(page=build_page(playlists, total, paging.take, paging.current_page))


@bp.route('/playlists', methods=['POST'])
@login_required
def create_playlist():
    """Create a new playlist."""
    data = json_body()
    playlist = PlaylistService(db.session).create(current_user.id, data.get('name'))
    return respond(playlist.to_dict(), message='Playlist created', status_code=201)


@bp.route('/playlists/<playlist_id>', methods=['PUT'])
@login_required
def rename_playlist(playlist_id):
    """Rename a playlist."""
    data = json_body()
    playlist = PlaylistService(db.session).rename(
        current_user.id,
        parse_positive_int(playlist_id, 'playlist id'),
        data.get('name'),
    )
    return respond(playlist.to_dict(), message='Playlist updated')


@bp.route('/playlists/<playlist_id>', methods=['DELETE'])
@login_required
def delete_playlist(playlist_id):
    """Delete playlist and all mappings."""
    deleted = PlaylistService(db.session).delete(
        current_user.id, parse_positive_int(playlist_id, 'playlist id'),
    )
    return respond(deleted, message='Playlist deleted')


# ==================== Song Management ====================

@bp.route('/playlists/<playlist_id>/songs', methods=['GET'])
@login_required
def get_playlist_songs(playlist_id):
    """Return one page of songs in a playlist."""
    playlist_id = parse_positive_int(playlist_id, 'playlist id')
    paging = parse_pagination_params(request.args)
    songs, total = PlaylistService(db.session).list_songs(
        current_user.id, playlist_id, paging.skip, paging.take,
    )
    return respond(page=build_page(songs, total, paging.take, paging.current_page))


@bp.route('/playlists/<playlist_id>/songs', methods=['POST'])
@login_required
def add_song_to_playlist(playlist_id):
    """Add a catalog song to a playlist."""
    data = json_body()
    entry = PlaylistService(db.session).add_song(
        current_user.id,
        parse_positive_int(playlist_id, 'playlist id'),
        parse_positive_int(data.get('songId'), 'song id'),
    )
    return respond(entry.to_dict(), message='Song added to playlist', status_code=201)


@bp.route('/playlists/<playlist_id>/songs/<song_id>', methods=['DELETE'])
@login_required
def remove_song_from_playlist(playlist_id, song_id):
    """Remove song from playlist."""
    removed = PlaylistService(db.session).remove_song(
        current_user.id,
        parse_positive_int(playlist_id, 'playlist id'),
        parse_positive_int(song_id, 'song id'),
    )
    return respond(removed, message='Song removed from playlist')
