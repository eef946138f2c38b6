"""
Membership Services - favorites and playlist contents.

Both favorites (user <-> song) and playlist membership (playlist <-> song)
are many-to-many edges guarded the same way:

1. the owning resource must exist and belong to the acting user, otherwise
   NotFound (a playlist owned by someone else looks exactly like a missing one)
2. the target song must exist, otherwise NotFound
3. the edge is inserted; the table's unique constraint decides duplicates,
   which surface as Conflict

Adding an existing edge and removing a missing one are both errors.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.exceptions import Conflict, InvalidArgument, NotFound
from app.models import Favorite, Playlist, PlaylistSong, Song, User

logger = logging.getLogger(__name__)

PLAYLIST_NAME_MAX = 120


class MembershipGuard:
    """Shared ownership and uniqueness checks for edge mutations."""

    def __init__(self, session):
        self.session = session

    def _require_target(self, song_id: int) -> Song:
        song = self.session.get(Song, song_id)
        if not song:
            raise NotFound('Song not found')
        return song

    def _commit_unique(self, conflict_message: str):
        """Commit pending changes, mapping a unique violation to Conflict."""
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(conflict_message)

    def _insert_unique(self, edge, conflict_message: str):
        self.session.add(edge)
        self._commit_unique(conflict_message)
        return edge

    def _delete_edge(self, edge):
        snapshot = edge.to_dict()
        self.session.delete(edge)
        self.session.commit()
        return snapshot


class FavoriteService(MembershipGuard):
    """Favorite songs of a user."""

    def _require_user(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if not user:
            raise NotFound('User not found')
        return user

    def add(self, user_id: int, song_id: int) -> Favorite:
        self._require_user(user_id)
        self._require_target(song_id)
        favorite = self._insert_unique(
            Favorite(user_id=user_id, song_id=song_id),
            'Song already in favorites',
        )
        logger.info('User %s favorited song %s', user_id, song_id)
        return favorite

    def remove(self, user_id: int, song_id: int) -> dict:
        """Remove a favorite and return the deleted edge."""
        self._require_user(user_id)
        favorite = (
            self.session.query(Favorite)
            .filter_by(user_id=user_id, song_id=song_id)
            .first()
        )
        if not favorite:
            raise NotFound('Song not found in favorites')
        return self._delete_edge(favorite)

    def list(self, user_id: int, skip: int, take: int):
        """Return (songs, total) for one page of favorites, newest first."""
        self._require_user(user_id)
        query = self.session.query(Favorite).filter_by(user_id=user_id)
        total = query.count()
        if skip >= total:
            return [], total
        entries = (
            query.order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .offset(skip)
            .limit(take)
            .all()
        )
        songs = []
        for entry in entries:
            song_data = entry.song.to_dict()
            song_data['favoritedAt'] = entry.created_at.isoformat() if entry.created_at else None
            songs.append(song_data)
        return songs, total


class PlaylistService(MembershipGuard):
    """Playlists and their songs, always scoped to the owning user."""

    @staticmethod
    def _clean_name(name) -> str:
        name = str(name or '').strip()
        if not name:
            raise InvalidArgument('Playlist name is required')
        if len(name) > PLAYLIST_NAME_MAX:
            raise InvalidArgument('Playlist name is too long')
        return name

    def _owned_playlist(self, user_id: int, playlist_id: int) -> Playlist:
        playlist = (
            self.session.query(Playlist)
            .filter_by(id=playlist_id, user_id=user_id)
            .first()
        )
        if not playlist:
            raise NotFound('Playlist not found')
        return playlist

    def create(self, user_id: int, name) -> Playlist:
        playlist = Playlist(name=self._clean_name(name), user_id=user_id)
        return self._insert_unique(playlist, 'Playlist name already exists')

    def rename(self, user_id: int, playlist_id: int, name) -> Playlist:
        name = self._clean_name(name)
        playlist = self._owned_playlist(user_id, playlist_id)
        playlist.name = name
        self._commit_unique('Playlist name already exists')
        return playlist

    def delete(self, user_id: int, playlist_id: int) -> dict:
        """Delete a playlist with all its memberships."""
        playlist = self._owned_playlist(user_id, playlist_id)
        snapshot = playlist.to_dict()
        self.session.delete(playlist)
        self.session.commit()
        logger.info('User %s deleted playlist %s', user_id, playlist_id)
        return snapshot

    def add_song(self, user_id: int, playlist_id: int, song_id: int) -> PlaylistSong:
        self._owned_playlist(user_id, playlist_id)
        self._require_target(song_id)
        return self._insert_unique(
            PlaylistSong(playlist_id=playlist_id, song_id=song_id),
            'Song already in playlist',
        )

    def remove_song(self, user_id: int, playlist_id: int, song_id: int) -> dict:
        self._owned_playlist(user_id, playlist_id)
        entry = (
            self.session.query(PlaylistSong)
            .filter_by(playlist_id=playlist_id, song_id=song_id)
            .first()
        )
        if not entry:
            raise NotFound('Song not found in playlist')
        return self._delete_edge(entry)

    def list_for_user(self, user_id: int, skip: int, take: int):
        query = self.session.query(Playlist).filter_by(user_id=user_id)
        total = query.count()
        if skip >= total:
            return [], total
        playlists = (
            query.order_by(Playlist.created_at.desc(), Playlist.id.desc())
            .offset(skip)
            .limit(take)
            .all()
        )
        return [p.to_dict() for p in playlists], total

    def list_songs(self, user_id: int, playlist_id: int, skip: int, take: int):
        """Return (songs, total) for one page of a playlist, in insertion order."""
        playlist = self._owned_playlist(user_id, playlist_id)
        query = playlist.songs
        total = query.count()
        if skip >= total:
            return [], total
        entries = (
            query.order_by(PlaylistSong.added_at.asc(), PlaylistSong.id.asc())
            .offset(skip)
            .limit(take)
            .all()
        )
        songs = []
        for entry in entries:
            song_data = entry.song.to_dict()
            song_data['addedAt'] = entry.added_at.isoformat() if entry.added_at else None
            songs.append(song_data)
        return songs, total
