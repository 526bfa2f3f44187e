# ============================================================================
# FILE: catalog_api/services/song_service.py
# ============================================================================
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy import update
from sqlalchemy.orm import Session
from catalog_api.core.exceptions import BadRequestError, NotFoundError
from catalog_api.core.storage import MediaUploader, SONG_FOLDER, SONG_AUDIO_FOLDER
from catalog_api.db.models import Album, Artist, Song
from catalog_api.schemas.song import SongCreate, SongUpdate
from catalog_api.services.relations import song_likes
import logging

logger = logging.getLogger(__name__)


class SongService:
    """Service layer for song operations"""

    def list_songs(self, db: Session, search: Optional[str] = None, genre: Optional[str] = None,
                   artist_id: Optional[int] = None) -> List[Song]:
        query = db.query(Song)
        if search:
            query = query.filter(Song.title.icontains(search, autoescape=True))
        if genre:
            query = query.filter(Song.genre.icontains(genre, autoescape=True))
        if artist_id:
            query = query.filter(Song.artist_id == artist_id)
        return query.order_by(Song.play_count.desc(), Song.id).all()

    def get_top_songs(self, db: Session, limit: int) -> List[Song]:
        return db.query(Song).order_by(Song.play_count.desc(), Song.id).limit(limit).all()

    def get_new_releases(self, db: Session, limit: int) -> List[Song]:
        return db.query(Song).order_by(Song.created_at.desc(), Song.id.desc()).limit(limit).all()

    def get_song(self, db: Session, song_id: int) -> Song:
        song = db.get(Song, song_id)
        if not song:
            raise NotFoundError("Song not found")
        return song

    def _check_artist_and_album(self, db: Session, artist_id: int, album_id: Optional[int]) -> None:
        """Artist must exist; an album, when given, must exist and share the artist"""
        if not db.get(Artist, artist_id):
            raise NotFoundError("Artist not found")
        if album_id is None:
            return
        album = db.get(Album, album_id)
        if not album:
            raise NotFoundError("Album not found")
        if album.artist_id != artist_id:
            raise BadRequestError("Album does not belong to the specified artist")

    def create_song(self, db: Session, song_data: SongCreate, uploader: MediaUploader,
                    cover_file: Optional[UploadFile] = None, audio_file: Optional[UploadFile] = None) -> Song:
        """Create a song; uploaded files win over URL strings"""
        self._check_artist_and_album(db, song_data.artist_id, song_data.album_id)

        cover_image = song_data.cover_image
        audio_url = song_data.audio_url
        if cover_file is not None:
            cover_image = uploader.upload(cover_file, SONG_FOLDER)
        if audio_file is not None:
            audio_url = uploader.upload(audio_file, SONG_AUDIO_FOLDER, resource_type="audio")

        try:
            song = Song(
                title=song_data.title,
                artist_id=song_data.artist_id,
                album_id=song_data.album_id,
                duration=song_data.duration,
                genre=song_data.genre,
                lyric=song_data.lyric,
                is_explicit=song_data.is_explicit,
                audio_url=audio_url,
                cover_image=cover_image,
            )
            db.add(song)
            db.commit()
            db.refresh(song)
            logger.info(f"Song created: {song.id} ({song.title})")
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating song: {e}")
            raise

    def update_song(self, db: Session, song_id: int, update_data: SongUpdate, uploader: MediaUploader,
                    cover_file: Optional[UploadFile] = None, audio_file: Optional[UploadFile] = None) -> Song:
        song = self.get_song(db, song_id)
        changes = update_data.model_dump(exclude_unset=True)
        if not changes and cover_file is None and audio_file is None:
            raise BadRequestError("No fields provided to update")

        if "artist_id" in changes or "album_id" in changes:
            self._check_artist_and_album(
                db,
                changes.get("artist_id", song.artist_id),
                changes.get("album_id", song.album_id),
            )

        if cover_file is not None:
            changes["cover_image"] = uploader.upload(cover_file, SONG_FOLDER)
        if audio_file is not None:
            changes["audio_url"] = uploader.upload(audio_file, SONG_AUDIO_FOLDER, resource_type="audio")

        try:
            for field, value in changes.items():
                setattr(song, field, value)
            db.commit()
            db.refresh(song)
            logger.info(f"Song updated: {song_id}")
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating song: {e}")
            raise

    def delete_song(self, db: Session, song_id: int) -> None:
        song = self.get_song(db, song_id)
        try:
            db.delete(song)
            db.commit()
            logger.info(f"Song deleted: {song_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song: {e}")
            raise

    def like_song(self, db: Session, song_id: int, user_id: int) -> Song:
        song = self.get_song(db, song_id)
        song_likes.add(db, user_id, song_id)
        db.refresh(song)
        return song

    def unlike_song(self, db: Session, song_id: int, user_id: int) -> Song:
        song = self.get_song(db, song_id)
        song_likes.remove(db, user_id, song_id)
        db.refresh(song)
        return song

    def record_play(self, db: Session, song_id: int) -> Song:
        """Increment in the store so concurrent plays are not lost"""
        song = self.get_song(db, song_id)
        try:
            db.execute(update(Song).where(Song.id == song_id).values(play_count=Song.play_count + 1))
            db.commit()
            db.refresh(song)
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error recording play: {e}")
            raise


# Create singleton instance
song_service = SongService()
