# ============================================================================
# FILE: catalog_api/db/models/song.py
# ============================================================================
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_api.db.base import Base


class Song(Base):
    """Song model; belongs to one artist and optionally one album"""
    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="SET NULL"), nullable=True, index=True)
    duration = Column(Integer, nullable=False)  # Duration in seconds
    genre = Column(String, nullable=True)
    play_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    lyric = Column(Text, nullable=True)
    is_explicit = Column(Boolean, nullable=False, default=False)
    audio_url = Column(String, nullable=False)
    cover_image = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    artist = relationship("Artist", back_populates="songs")
    album = relationship("Album", back_populates="songs")
    likes = relationship("SongLike", back_populates="song", cascade="all", passive_deletes=True)


class SongLike(Base):
    """Junction table for users liking songs"""
    __tablename__ = "users_liked_songs"
    __table_args__ = (UniqueConstraint("user_id", "song_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="liked_songs")
    song = relationship("Song", back_populates="likes")
