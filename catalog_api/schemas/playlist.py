# ============================================================================
# FILE: catalog_api/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from catalog_api.schemas.common import CamelModel, UserBrief
from catalog_api.schemas.song import SongResponse


class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str
    description: Optional[str] = None
    is_public: bool = True
    cover_image: Optional[str] = None


class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist"""
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    cover_image: Optional[str] = None


class PlaylistSongResponse(CamelModel):
    """Schema for playlist song response"""
    id: int
    song_id: int
    added_at: datetime
    song: SongResponse


class PlaylistResponse(CamelModel):
    """Schema for playlist response"""
    id: int
    name: str
    description: Optional[str] = None
    is_public: bool
    cover_image: Optional[str] = None
    follower_count: int
    creator_id: int
    song_count: int = 0
    created_at: datetime
    updated_at: datetime
    creator: Optional[UserBrief] = None


class PlaylistDetail(PlaylistResponse):
    songs: List[PlaylistSongResponse] = []
    collaborators: List[UserBrief] = Field(
        default=[], validation_alias="collaborator_users", serialization_alias="collaborators"
    )


class PlaylistEnvelope(CamelModel):
    playlist: PlaylistResponse


class PlaylistDetailEnvelope(CamelModel):
    playlist: PlaylistDetail


class PlaylistListResponse(CamelModel):
    playlists: List[PlaylistResponse]


class MyPlaylistsResponse(CamelModel):
    count: int
    playlists: List[PlaylistResponse]


class PlaylistActionResponse(CamelModel):
    message: str
    playlist: PlaylistDetail


class PlaylistFollowResponse(CamelModel):
    message: str
    playlist: PlaylistResponse
