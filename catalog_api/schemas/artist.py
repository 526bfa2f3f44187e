# ============================================================================
# FILE: catalog_api/schemas/artist.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from catalog_api.schemas.common import CamelModel


class ArtistCreate(BaseModel):
    name: str
    bio: Optional[str] = None
    dob: Optional[date] = None
    image: Optional[str] = None
    verification_status: bool = False


class ArtistUpdate(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    dob: Optional[date] = None
    image: Optional[str] = None
    verification_status: Optional[bool] = None


class ArtistResponse(CamelModel):
    id: int
    name: str
    bio: Optional[str] = None
    dob: Optional[date] = None
    image: Optional[str] = None
    verification_status: bool
    follower_count: int
    song_count: int = 0
    album_count: int = 0
    created_at: datetime
    updated_at: datetime


class ArtistSong(CamelModel):
    id: int
    title: str
    album_id: Optional[int] = None
    duration: int
    genre: Optional[str] = None
    play_count: int
    like_count: int
    is_explicit: bool
    audio_url: str
    cover_image: Optional[str] = None


class ArtistAlbum(CamelModel):
    id: int
    title: str
    cover_image: Optional[str] = None
    release_date: Optional[date] = None
    genre: Optional[str] = None


class ArtistDetail(ArtistResponse):
    songs: List[ArtistSong] = []
    albums: List[ArtistAlbum] = []


class ArtistEnvelope(CamelModel):
    artist: ArtistResponse


class ArtistDetailEnvelope(CamelModel):
    artist: ArtistDetail


class ArtistListResponse(CamelModel):
    artists: List[ArtistResponse]


class TopArtistsResponse(CamelModel):
    count: int
    limit: int
    artists: List[ArtistResponse]


class ArtistFollowResponse(CamelModel):
    message: str
    artist: ArtistResponse
