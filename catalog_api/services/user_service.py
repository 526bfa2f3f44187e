# ============================================================================
# FILE: catalog_api/services/user_service.py
# ============================================================================
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from catalog_api.config import settings
from catalog_api.core.exceptions import ConflictError, BadRequestError, NotFoundError, UnauthorizedError
from catalog_api.core.security import get_password_hash, verify_password
from catalog_api.db.models import User, Song, Artist, Playlist, Album, SongLike, ArtistFollow, PlaylistFollow, SavedAlbum
from catalog_api.schemas.user import UserCreate, UserUpdate
from catalog_api.services.relations import COUNTED_RELATIONS
from catalog_api.validators.query import calculate_skip
import logging
import math

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        if self.get_user_by_email(db, user_data.email):
            raise ConflictError("User with this email already exists")
        if user_data.username and self.get_user_by_username(db, user_data.username):
            raise ConflictError("Username is already taken")

        try:
            user = User(
                email=user_data.email,
                username=user_data.username,
                full_name=user_data.full_name,
                address=user_data.address,
                hashed_password=get_password_hash(user_data.password),
                is_admin=user_data.is_admin and settings.ALLOW_ADMIN_REGISTRATION,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.id} ({user.email})")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    def authenticate_user(self, db: Session, email: str, password: str) -> User:
        """Authenticate user with email and password"""
        user = self.get_user_by_email(db, email)
        if not user or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid email or password")
        return user

    def update_profile(self, db: Session, user: User, update_data: UserUpdate) -> User:
        """Apply only the fields present in the request"""
        changes = update_data.model_dump(exclude_unset=True)
        if not changes:
            raise BadRequestError("No fields provided to update")

        username = changes.get("username")
        if username and username != user.username:
            existing = self.get_user_by_username(db, username)
            if existing and existing.id != user.id:
                raise ConflictError("Username is already taken")

        try:
            password = changes.pop("password", None)
            if password is not None:
                user.hashed_password = get_password_hash(password)
            for field, value in changes.items():
                setattr(user, field, value)
            db.commit()
            db.refresh(user)
            logger.info(f"Profile updated: {user.id}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating profile: {e}")
            raise

    def list_users(self, db: Session, page: int, limit: int) -> Tuple[List[User], dict]:
        """Newest first, with pagination metadata"""
        total_count = db.query(User).count()
        users = (
            db.query(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(calculate_skip(page, limit))
            .limit(limit)
            .all()
        )
        total_pages = math.ceil(total_count / limit) if total_count else 0
        pagination = {
            "current_page": page,
            "limit": limit,
            "total_count": total_count,
            "total_pages": total_pages,
            "has_next_page": page < total_pages,
            "has_prev_page": page > 1,
        }
        return users, pagination

    def delete_user(self, db: Session, user_id: int) -> None:
        """
        Counted relations are released first so follower and like counters
        drop with their rows; playlists and the remaining relation rows go
        with the user via ON DELETE CASCADE
        """
        user = self.get_user(db, user_id)
        if not user:
            raise NotFoundError("User not found")

        try:
            for relation in COUNTED_RELATIONS:
                relation.release_user(db, user_id)
            db.delete(user)
            db.commit()
            logger.info(f"User deleted: {user_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting user: {e}")
            raise

    def get_liked_songs(self, db: Session, user_id: int) -> List[Song]:
        return (
            db.query(Song)
            .join(SongLike, SongLike.song_id == Song.id)
            .filter(SongLike.user_id == user_id)
            .order_by(SongLike.created_at.desc(), SongLike.id.desc())
            .all()
        )

    def get_followed_artists(self, db: Session, user_id: int) -> List[Artist]:
        return (
            db.query(Artist)
            .join(ArtistFollow, ArtistFollow.artist_id == Artist.id)
            .filter(ArtistFollow.user_id == user_id)
            .order_by(ArtistFollow.created_at.desc(), ArtistFollow.id.desc())
            .all()
        )

    def get_followed_playlists(self, db: Session, user_id: int) -> List[Playlist]:
        return (
            db.query(Playlist)
            .join(PlaylistFollow, PlaylistFollow.playlist_id == Playlist.id)
            .filter(PlaylistFollow.user_id == user_id)
            .order_by(PlaylistFollow.created_at.desc(), PlaylistFollow.id.desc())
            .all()
        )

    def get_saved_albums(self, db: Session, user_id: int) -> List[Album]:
        return (
            db.query(Album)
            .join(SavedAlbum, SavedAlbum.album_id == Album.id)
            .filter(SavedAlbum.user_id == user_id)
            .order_by(SavedAlbum.created_at.desc(), SavedAlbum.id.desc())
            .all()
        )


# Create singleton instance
user_service = UserService()
