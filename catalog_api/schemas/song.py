# ============================================================================
# FILE: catalog_api/schemas/song.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from catalog_api.schemas.common import CamelModel, ArtistBrief


class SongCreate(BaseModel):
    """Schema for creating a song; audio_url may instead come from an upload"""
    title: str
    artist_id: int
    duration: int
    album_id: Optional[int] = None
    genre: Optional[str] = None
    audio_url: Optional[str] = None
    cover_image: Optional[str] = None
    lyric: Optional[str] = None
    is_explicit: bool = False


class SongUpdate(BaseModel):
    title: Optional[str] = None
    artist_id: Optional[int] = None
    album_id: Optional[int] = None
    duration: Optional[int] = None
    genre: Optional[str] = None
    audio_url: Optional[str] = None
    cover_image: Optional[str] = None
    lyric: Optional[str] = None
    is_explicit: Optional[bool] = None


class AlbumBrief(CamelModel):
    id: int
    title: str
    cover_image: Optional[str] = None
    release_date: Optional[date] = None


class SongResponse(CamelModel):
    id: int
    title: str
    artist_id: int
    album_id: Optional[int] = None
    duration: int
    genre: Optional[str] = None
    play_count: int
    like_count: int
    lyric: Optional[str] = None
    is_explicit: bool
    audio_url: str
    cover_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    artist: Optional[ArtistBrief] = None
    album: Optional[AlbumBrief] = None


class SongEnvelope(CamelModel):
    song: SongResponse


class SongListResponse(CamelModel):
    songs: List[SongResponse]


class LimitedSongListResponse(CamelModel):
    count: int
    limit: int
    songs: List[SongResponse]


class SongActionResponse(CamelModel):
    message: str
    song: SongResponse
