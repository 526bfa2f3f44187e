# ============================================================================
# FILE: catalog_api/schemas/album.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from catalog_api.schemas.common import CamelModel, ArtistBrief
from catalog_api.schemas.song import SongResponse


class AlbumCreate(BaseModel):
    title: str
    artist_id: int
    release_date: Optional[date] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    is_explicit: bool = False


class AlbumUpdate(BaseModel):
    title: Optional[str] = None
    artist_id: Optional[int] = None
    release_date: Optional[date] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    is_explicit: Optional[bool] = None


class AlbumResponse(CamelModel):
    id: int
    title: str
    cover_image: Optional[str] = None
    release_date: Optional[date] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    artist_id: int
    is_explicit: bool
    song_count: int = 0
    created_at: datetime
    updated_at: datetime
    artist: Optional[ArtistBrief] = None


class AlbumDetail(AlbumResponse):
    songs: List[SongResponse] = []


class AlbumEnvelope(CamelModel):
    album: AlbumResponse


class AlbumDetailEnvelope(CamelModel):
    album: AlbumDetail


class AlbumListResponse(CamelModel):
    albums: List[AlbumResponse]


class LimitedAlbumListResponse(CamelModel):
    count: int
    limit: int
    albums: List[AlbumResponse]


class AlbumSongsResponse(CamelModel):
    message: str
    album: AlbumDetail


class AlbumSongRemovedResponse(CamelModel):
    message: str
    song: SongResponse
    album: AlbumDetail
