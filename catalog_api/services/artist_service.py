# ============================================================================
# FILE: catalog_api/services/artist_service.py
# ============================================================================
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy.orm import Session
from catalog_api.core.exceptions import BadRequestError, NotFoundError
from catalog_api.core.storage import MediaUploader, ARTIST_FOLDER
from catalog_api.db.models import Artist, Song
from catalog_api.schemas.artist import ArtistCreate, ArtistUpdate
from catalog_api.services.relations import artist_follows
import logging

logger = logging.getLogger(__name__)


class ArtistService:
    """Service layer for artist operations"""

    def list_artists(self, db: Session, search: Optional[str] = None, verified: Optional[bool] = None) -> List[Artist]:
        query = db.query(Artist)
        if search:
            query = query.filter(Artist.name.icontains(search, autoescape=True))
        if verified is not None:
            query = query.filter(Artist.verification_status == verified)
        return query.order_by(Artist.follower_count.desc(), Artist.id).all()

    def get_top_artists(self, db: Session, limit: int) -> List[Artist]:
        return db.query(Artist).order_by(Artist.follower_count.desc(), Artist.id).limit(limit).all()

    def get_artist(self, db: Session, artist_id: int) -> Artist:
        artist = db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist not found")
        return artist

    def get_top_songs(self, db: Session, artist_id: int, limit: int) -> List[Song]:
        self.get_artist(db, artist_id)
        return (
            db.query(Song)
            .filter(Song.artist_id == artist_id)
            .order_by(Song.play_count.desc(), Song.id)
            .limit(limit)
            .all()
        )

    def create_artist(self, db: Session, artist_data: ArtistCreate, uploader: MediaUploader,
                      image_file: Optional[UploadFile] = None) -> Artist:
        """Create an artist; an uploaded image wins over an image URL"""
        image = artist_data.image
        if image_file is not None:
            image = uploader.upload(image_file, ARTIST_FOLDER)

        try:
            artist = Artist(
                name=artist_data.name,
                bio=artist_data.bio,
                dob=artist_data.dob,
                image=image,
                verification_status=artist_data.verification_status,
            )
            db.add(artist)
            db.commit()
            db.refresh(artist)
            logger.info(f"Artist created: {artist.id} ({artist.name})")
            return artist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating artist: {e}")
            raise

    def update_artist(self, db: Session, artist_id: int, update_data: ArtistUpdate, uploader: MediaUploader,
                      image_file: Optional[UploadFile] = None) -> Artist:
        artist = self.get_artist(db, artist_id)
        changes = update_data.model_dump(exclude_unset=True)
        if not changes and image_file is None:
            raise BadRequestError("No fields provided to update")

        if image_file is not None:
            changes["image"] = uploader.upload(image_file, ARTIST_FOLDER)

        try:
            for field, value in changes.items():
                setattr(artist, field, value)
            db.commit()
            db.refresh(artist)
            logger.info(f"Artist updated: {artist_id}")
            return artist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating artist: {e}")
            raise

    def delete_artist(self, db: Session, artist_id: int) -> None:
        """Songs and albums are removed by the foreign key cascade"""
        artist = self.get_artist(db, artist_id)
        try:
            db.delete(artist)
            db.commit()
            logger.info(f"Artist deleted: {artist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting artist: {e}")
            raise

    def follow_artist(self, db: Session, artist_id: int, user_id: int) -> Artist:
        artist = self.get_artist(db, artist_id)
        artist_follows.add(db, user_id, artist_id)
        db.refresh(artist)
        return artist

    def unfollow_artist(self, db: Session, artist_id: int, user_id: int) -> Artist:
        artist = self.get_artist(db, artist_id)
        artist_follows.remove(db, user_id, artist_id)
        db.refresh(artist)
        return artist


# Create singleton instance
artist_service = ArtistService()
