# ============================================================================
# FILE: catalog_api/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_api.db.base import Base


class User(Base):
    """User model for authentication and user-specific features"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=True)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    profile_picture = Column(String, nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships (rows are removed by the database cascade)
    playlists = relationship("Playlist", back_populates="creator", cascade="all", passive_deletes=True)
    liked_songs = relationship("SongLike", back_populates="user", cascade="all", passive_deletes=True)
    followed_artists = relationship("ArtistFollow", back_populates="user", cascade="all", passive_deletes=True)
    followed_playlists = relationship("PlaylistFollow", back_populates="user", cascade="all", passive_deletes=True)
    saved_albums = relationship("SavedAlbum", back_populates="user", cascade="all", passive_deletes=True)

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or "User"
