# ============================================================================
# FILE: catalog_api/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_api.db.base import Base


class Playlist(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    cover_image = Column(String, nullable=True)
    follower_count = Column(Integer, nullable=False, default=0)
    creator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    creator = relationship("User", back_populates="playlists")
    songs = relationship(
        "PlaylistSong",
        back_populates="playlist",
        passive_deletes=True,
        cascade="all",
        order_by="PlaylistSong.id",
    )
    collaborators = relationship("PlaylistCollaborator", back_populates="playlist", cascade="all", passive_deletes=True)
    followers = relationship("PlaylistFollow", back_populates="playlist", cascade="all", passive_deletes=True)

    @property
    def song_count(self) -> int:
        return len(self.songs)

    @property
    def collaborator_users(self):
        return [collab.user for collab in self.collaborators]

    def can_edit_songs(self, user_id: int) -> bool:
        """Creator and collaborators may add or remove songs"""
        if self.creator_id == user_id:
            return True
        return any(collab.user_id == user_id for collab in self.collaborators)


class PlaylistSong(Base):
    """Junction table for playlist songs"""
    __tablename__ = "songs_playlists"
    __table_args__ = (UniqueConstraint("song_id", "playlist_id"),)

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
    song = relationship("Song")


class PlaylistFollow(Base):
    """Junction table for users following playlists"""
    __tablename__ = "users_follow_playlist"
    __table_args__ = (UniqueConstraint("user_id", "playlist_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="followed_playlists")
    playlist = relationship("Playlist", back_populates="followers")


class PlaylistCollaborator(Base):
    """Junction table for users collaborating on playlists"""
    __tablename__ = "users_collaborate_playlist"
    __table_args__ = (UniqueConstraint("user_id", "playlist_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User")
    playlist = relationship("Playlist", back_populates="collaborators")
