# ============================================================================
# FILE: catalog_api/db/models/artist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_api.db.base import Base


class Artist(Base):
    """Artist model; owns songs and albums"""
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    dob = Column(Date, nullable=True)
    image = Column(String, nullable=True)
    verification_status = Column(Boolean, nullable=False, default=False)
    follower_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    songs = relationship("Song", back_populates="artist", cascade="all", passive_deletes=True, order_by="Song.play_count.desc()")
    albums = relationship("Album", back_populates="artist", cascade="all", passive_deletes=True)
    followers = relationship("ArtistFollow", back_populates="artist", cascade="all", passive_deletes=True)

    @property
    def song_count(self) -> int:
        return len(self.songs)

    @property
    def album_count(self) -> int:
        return len(self.albums)


class ArtistFollow(Base):
    """Junction table for users following artists"""
    __tablename__ = "users_artists"
    __table_args__ = (UniqueConstraint("user_id", "artist_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="followed_artists")
    artist = relationship("Artist", back_populates="followers")
