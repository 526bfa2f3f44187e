# ============================================================================
# FILE: catalog_api/db/models/album.py
# ============================================================================
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_api.db.base import Base


class Album(Base):
    """Album model; belongs to exactly one artist"""
    __tablename__ = "albums"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    cover_image = Column(String, nullable=True)
    release_date = Column(Date, nullable=True)
    genre = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    is_explicit = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    artist = relationship("Artist", back_populates="albums")
    songs = relationship("Song", back_populates="album", passive_deletes=True, order_by="Song.play_count.desc()")
    saved_by = relationship("SavedAlbum", back_populates="album", cascade="all", passive_deletes=True)

    @property
    def song_count(self) -> int:
        return len(self.songs)


class SavedAlbum(Base):
    """Junction table for albums saved to a user's library"""
    __tablename__ = "users_albums"
    __table_args__ = (UniqueConstraint("user_id", "album_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="saved_albums")
    album = relationship("Album", back_populates="saved_by")
