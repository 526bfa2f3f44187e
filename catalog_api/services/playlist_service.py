# ============================================================================
# FILE: catalog_api/services/playlist_service.py
# ============================================================================
from typing import List, Optional, Set, Tuple
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from catalog_api.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from catalog_api.core.storage import MediaUploader, PLAYLIST_FOLDER
from catalog_api.db.models import Playlist, PlaylistCollaborator, PlaylistSong, User
from catalog_api.schemas.playlist import PlaylistCreate, PlaylistUpdate
from catalog_api.services.album_service import find_songs
from catalog_api.services.relations import playlist_follows
import logging

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service layer for playlist operations"""

    def list_public_playlists(self, db: Session, search: Optional[str] = None) -> List[Playlist]:
        query = db.query(Playlist).filter(Playlist.is_public.is_(True))
        if search:
            query = query.filter(Playlist.name.icontains(search, autoescape=True))
        return query.order_by(Playlist.follower_count.desc(), Playlist.id.desc()).all()

    def get_user_playlists(self, db: Session, user_id: int, search: Optional[str] = None) -> List[Playlist]:
        """Get all playlists created by a user"""
        query = db.query(Playlist).filter(Playlist.creator_id == user_id)
        if search:
            query = query.filter(Playlist.name.icontains(search, autoescape=True))
        return query.order_by(Playlist.updated_at.desc(), Playlist.id.desc()).all()

    def _load(self, db: Session, playlist_id: int) -> Playlist:
        playlist = db.get(Playlist, playlist_id)
        if not playlist:
            raise NotFoundError("Playlist not found")
        return playlist

    def get_playlist(self, db: Session, playlist_id: int, user: Optional[User] = None) -> Playlist:
        """Private playlists only exist for their creator and collaborators"""
        playlist = self._load(db, playlist_id)
        if not playlist.is_public and (user is None or not playlist.can_edit_songs(user.id)):
            raise NotFoundError("Playlist not found")
        return playlist

    def _owned(self, db: Session, playlist_id: int, user_id: int, message: str) -> Playlist:
        playlist = self._load(db, playlist_id)
        if playlist.creator_id != user_id:
            raise ForbiddenError(message)
        return playlist

    def get_editable(self, db: Session, playlist_id: int, user_id: int) -> Playlist:
        """Creator or collaborator, else 403"""
        playlist = self._load(db, playlist_id)
        if not playlist.can_edit_songs(user_id):
            raise ForbiddenError("Not authorized to modify this playlist")
        return playlist

    def create_playlist(self, db: Session, user_id: int, playlist_data: PlaylistCreate, uploader: MediaUploader,
                        cover_file: Optional[UploadFile] = None) -> Playlist:
        """Create a new playlist for a user"""
        cover_image = playlist_data.cover_image
        if cover_file is not None:
            cover_image = uploader.upload(cover_file, PLAYLIST_FOLDER)

        try:
            playlist = Playlist(
                creator_id=user_id,
                name=playlist_data.name,
                description=playlist_data.description,
                is_public=playlist_data.is_public,
                cover_image=cover_image,
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def update_playlist(self, db: Session, playlist_id: int, user_id: int, update_data: PlaylistUpdate,
                        uploader: MediaUploader, cover_file: Optional[UploadFile] = None) -> Playlist:
        """Update playlist details"""
        playlist = self._owned(db, playlist_id, user_id, "Not authorized to update this playlist")
        changes = update_data.model_dump(exclude_unset=True)
        if not changes and cover_file is None:
            raise BadRequestError("No fields provided to update")

        if cover_file is not None:
            changes["cover_image"] = uploader.upload(cover_file, PLAYLIST_FOLDER)

        try:
            for field, value in changes.items():
                setattr(playlist, field, value)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist updated: {playlist_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise

    def delete_playlist(self, db: Session, playlist_id: int, user_id: int) -> None:
        """Delete a playlist"""
        playlist = self._owned(db, playlist_id, user_id, "Not authorized to delete this playlist")
        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise

    def _present_song_ids(self, db: Session, playlist_id: int, song_ids: List[int]) -> Set[int]:
        return {
            song_id for (song_id,) in db.query(PlaylistSong.song_id).filter(
                PlaylistSong.playlist_id == playlist_id,
                PlaylistSong.song_id.in_(song_ids),
            )
        }

    def add_songs(self, db: Session, playlist_id: int, user_id: int, song_ids: List[int]) -> Tuple[Playlist, int]:
        """
        Add songs to a playlist

        Songs already in the playlist are skipped; returns the playlist and
        the number of songs actually added. If another request adds one of
        the same songs first, the insert is retried once without it.
        """
        playlist = self.get_editable(db, playlist_id, user_id)
        songs = find_songs(db, song_ids)

        for attempt in range(2):
            present = self._present_song_ids(db, playlist_id, song_ids)
            new_songs = [song for song in songs if song.id not in present]
            try:
                for song in new_songs:
                    db.add(PlaylistSong(playlist_id=playlist_id, song_id=song.id))
                db.commit()
                db.refresh(playlist)
                logger.info(f"Added {len(new_songs)} song(s) to playlist {playlist_id}")
                return playlist, len(new_songs)
            except IntegrityError as e:
                db.rollback()
                if attempt:
                    logger.error(f"Error adding songs to playlist {playlist_id}: {e}")
                    raise
                logger.warning(f"Concurrent add on playlist {playlist_id}, retrying")
            except Exception as e:
                db.rollback()
                logger.error(f"Error adding songs to playlist: {e}")
                raise

    def remove_song(self, db: Session, playlist_id: int, user_id: int, song_id: int) -> Playlist:
        """Remove a song from a playlist"""
        playlist = self.get_editable(db, playlist_id, user_id)
        playlist_song = db.query(PlaylistSong).filter(
            PlaylistSong.playlist_id == playlist_id,
            PlaylistSong.song_id == song_id,
        ).first()
        if not playlist_song:
            raise NotFoundError("Song is not in this playlist")

        try:
            db.delete(playlist_song)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Song removed from playlist {playlist_id}: {song_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing song from playlist: {e}")
            raise

    def add_collaborator(self, db: Session, playlist_id: int, user_id: int, collaborator_id: int) -> Playlist:
        playlist = self._owned(db, playlist_id, user_id, "Not authorized to modify this playlist")
        if collaborator_id == playlist.creator_id:
            raise BadRequestError("The creator cannot be added as a collaborator")
        if not db.get(User, collaborator_id):
            raise NotFoundError("User not found")
        existing = db.query(PlaylistCollaborator).filter(
            PlaylistCollaborator.playlist_id == playlist_id,
            PlaylistCollaborator.user_id == collaborator_id,
        ).first()
        if existing:
            raise ConflictError("User is already a collaborator")

        try:
            db.add(PlaylistCollaborator(playlist_id=playlist_id, user_id=collaborator_id))
            db.commit()
            db.refresh(playlist)
            logger.info(f"User {collaborator_id} added as collaborator on playlist {playlist_id}")
            return playlist
        except IntegrityError:
            db.rollback()
            raise ConflictError("User is already a collaborator")
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding collaborator: {e}")
            raise

    def remove_collaborator(self, db: Session, playlist_id: int, user_id: int, collaborator_id: int) -> Playlist:
        playlist = self._owned(db, playlist_id, user_id, "Not authorized to modify this playlist")
        collaborator = db.query(PlaylistCollaborator).filter(
            PlaylistCollaborator.playlist_id == playlist_id,
            PlaylistCollaborator.user_id == collaborator_id,
        ).first()
        if not collaborator:
            raise NotFoundError("User is not a collaborator on this playlist")

        try:
            db.delete(collaborator)
            db.commit()
            db.refresh(playlist)
            logger.info(f"User {collaborator_id} removed from collaborators of playlist {playlist_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing collaborator: {e}")
            raise

    def follow_playlist(self, db: Session, playlist_id: int, user: User) -> Playlist:
        playlist = self.get_playlist(db, playlist_id, user)
        playlist_follows.add(db, user.id, playlist_id)
        db.refresh(playlist)
        return playlist

    def unfollow_playlist(self, db: Session, playlist_id: int, user: User) -> Playlist:
        playlist = self._load(db, playlist_id)
        playlist_follows.remove(db, user.id, playlist_id)
        db.refresh(playlist)
        return playlist


# Create singleton instance
playlist_service = PlaylistService()
