# ============================================================================
# FILE: catalog_api/services/album_service.py
# ============================================================================
from typing import List, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from catalog_api.core.exceptions import BadRequestError, ConflictError, NotFoundError
from catalog_api.core.storage import MediaUploader, ALBUM_FOLDER
from catalog_api.db.models import Album, Artist, SavedAlbum, Song
from catalog_api.schemas.album import AlbumCreate, AlbumUpdate
import logging

logger = logging.getLogger(__name__)


def find_songs(db: Session, song_ids: List[int]) -> List[Song]:
    """Load songs in request order; 404 naming every id that does not exist"""
    songs = db.query(Song).filter(Song.id.in_(song_ids)).all()
    by_id = {song.id: song for song in songs}
    missing = [str(song_id) for song_id in song_ids if song_id not in by_id]
    if missing:
        raise NotFoundError(f"Songs not found: {', '.join(missing)}")
    return [by_id[song_id] for song_id in song_ids]


class AlbumService:
    """Service layer for album operations"""

    def list_albums(self, db: Session, search: Optional[str] = None, artist_id: Optional[int] = None) -> List[Album]:
        query = db.query(Album)
        if search:
            query = query.filter(Album.title.icontains(search, autoescape=True))
        if artist_id:
            query = query.filter(Album.artist_id == artist_id)
        return query.order_by(Album.release_date.desc().nulls_last(), Album.id.desc()).all()

    def get_new_releases(self, db: Session, limit: int) -> List[Album]:
        return (
            db.query(Album)
            .order_by(Album.release_date.desc().nulls_last(), Album.created_at.desc(), Album.id.desc())
            .limit(limit)
            .all()
        )

    def get_album(self, db: Session, album_id: int) -> Album:
        album = db.get(Album, album_id)
        if not album:
            raise NotFoundError("Album not found")
        return album

    def create_album(self, db: Session, album_data: AlbumCreate, uploader: MediaUploader,
                     cover_file: Optional[UploadFile] = None) -> Album:
        if not db.get(Artist, album_data.artist_id):
            raise NotFoundError("Artist not found")

        cover_image = album_data.cover_image
        if cover_file is not None:
            cover_image = uploader.upload(cover_file, ALBUM_FOLDER)

        try:
            album = Album(
                title=album_data.title,
                artist_id=album_data.artist_id,
                release_date=album_data.release_date,
                genre=album_data.genre,
                description=album_data.description,
                cover_image=cover_image,
                is_explicit=album_data.is_explicit,
            )
            db.add(album)
            db.commit()
            db.refresh(album)
            logger.info(f"Album created: {album.id} ({album.title})")
            return album
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating album: {e}")
            raise

    def update_album(self, db: Session, album_id: int, update_data: AlbumUpdate, uploader: MediaUploader,
                     cover_file: Optional[UploadFile] = None) -> Album:
        album = self.get_album(db, album_id)
        changes = update_data.model_dump(exclude_unset=True)
        if not changes and cover_file is None:
            raise BadRequestError("No fields provided to update")

        new_artist_id = changes.get("artist_id")
        if new_artist_id is not None and new_artist_id != album.artist_id:
            if not db.get(Artist, new_artist_id):
                raise NotFoundError("Artist not found")
            # Songs keep their artist, so they would no longer match the album
            if album.songs:
                raise BadRequestError("Cannot change the artist of an album that contains songs")

        if cover_file is not None:
            changes["cover_image"] = uploader.upload(cover_file, ALBUM_FOLDER)

        try:
            for field, value in changes.items():
                setattr(album, field, value)
            db.commit()
            db.refresh(album)
            logger.info(f"Album updated: {album_id}")
            return album
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating album: {e}")
            raise

    def delete_album(self, db: Session, album_id: int) -> None:
        """The album's songs stay in the catalog with no album"""
        album = self.get_album(db, album_id)
        try:
            db.delete(album)
            db.commit()
            logger.info(f"Album deleted: {album_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting album: {e}")
            raise

    def add_songs(self, db: Session, album_id: int, song_ids: List[int]) -> Tuple[Album, int]:
        """
        Assign songs to the album

        All-or-nothing: if any song belongs to another artist no song is
        modified.
        """
        album = self.get_album(db, album_id)
        songs = find_songs(db, song_ids)

        if any(song.artist_id != album.artist_id for song in songs):
            raise BadRequestError("All songs must belong to the same artist as the album")

        try:
            for song in songs:
                song.album_id = album.id
            db.commit()
            db.refresh(album)
            logger.info(f"Added {len(songs)} song(s) to album {album_id}")
            return album, len(songs)
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding songs to album: {e}")
            raise

    def remove_song(self, db: Session, album_id: int, song_id: int) -> Tuple[Album, Song]:
        album = self.get_album(db, album_id)
        song = db.get(Song, song_id)
        if not song:
            raise NotFoundError("Song not found")
        if song.album_id != album.id:
            raise BadRequestError("Song is not in this album")

        try:
            song.album_id = None
            db.commit()
            db.refresh(song)
            db.refresh(album)
            logger.info(f"Song {song_id} removed from album {album_id}")
            return album, song
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing song from album: {e}")
            raise

    def save_album(self, db: Session, album_id: int, user_id: int) -> Album:
        album = self.get_album(db, album_id)
        existing = db.query(SavedAlbum).filter(
            SavedAlbum.user_id == user_id,
            SavedAlbum.album_id == album_id,
        ).first()
        if existing:
            raise ConflictError("Album is already in your library")

        try:
            db.add(SavedAlbum(user_id=user_id, album_id=album_id))
            db.commit()
            logger.info(f"Album {album_id} saved by user {user_id}")
            return album
        except IntegrityError:
            db.rollback()
            raise ConflictError("Album is already in your library")
        except Exception as e:
            db.rollback()
            logger.error(f"Error saving album: {e}")
            raise

    def unsave_album(self, db: Session, album_id: int, user_id: int) -> Album:
        album = self.get_album(db, album_id)
        saved = db.query(SavedAlbum).filter(
            SavedAlbum.user_id == user_id,
            SavedAlbum.album_id == album_id,
        ).first()
        if not saved:
            raise BadRequestError("Album is not in your library")

        try:
            db.delete(saved)
            db.commit()
            logger.info(f"Album {album_id} removed from library of user {user_id}")
            return album
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing saved album: {e}")
            raise


# Create singleton instance
album_service = AlbumService()
