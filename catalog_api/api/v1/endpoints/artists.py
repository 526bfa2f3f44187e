# ============================================================================
# FILE: catalog_api/api/v1/endpoints/artists.py
# ============================================================================
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from typing import Optional
from catalog_api.db.session import get_db
from catalog_api.api.dependencies import require_current_user, require_admin, read_payload
from catalog_api.core.storage import MediaUploader, get_media_uploader
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.artist import (
    ArtistEnvelope,
    ArtistDetailEnvelope,
    ArtistListResponse,
    TopArtistsResponse,
    ArtistFollowResponse,
)
from catalog_api.schemas.song import LimitedSongListResponse
from catalog_api.services.artist_service import artist_service
from catalog_api.db.models.user import User
from catalog_api.validators.common import parse_id
from catalog_api.validators.query import validate_limit, validate_search, validate_verified
from catalog_api.validators.artist import validate_create_artist, validate_update_artist

router = APIRouter()


@router.get("", response_model=ArtistListResponse)
async def list_artists(
    search: Optional[str] = None,
    verified: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List artists, most followed first
    Optional name search and verified filter
    """
    artists = artist_service.list_artists(db, validate_search(search), validate_verified(verified))
    return {"artists": artists}


@router.get("/top", response_model=TopArtistsResponse)
async def get_top_artists(limit: Optional[str] = None, db: Session = Depends(get_db)):
    limit_value = validate_limit(limit)
    artists = artist_service.get_top_artists(db, limit_value)
    return {"count": len(artists), "limit": limit_value, "artists": artists}


@router.get("/{artist_id}", response_model=ArtistDetailEnvelope)
async def get_artist(artist_id: str, db: Session = Depends(get_db)):
    """Artist with songs (most played first) and albums"""
    return {"artist": artist_service.get_artist(db, parse_id(artist_id, "artist ID"))}


@router.get("/{artist_id}/top-songs", response_model=LimitedSongListResponse)
async def get_artist_top_songs(artist_id: str, limit: Optional[str] = None, db: Session = Depends(get_db)):
    limit_value = validate_limit(limit)
    songs = artist_service.get_top_songs(db, parse_id(artist_id, "artist ID"), limit_value)
    return {"count": len(songs), "limit": limit_value, "songs": songs}


@router.post("", response_model=ArtistEnvelope, status_code=status.HTTP_201_CREATED)
async def create_artist(
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    """
    Create an artist
    Admin only; accepts an `image` file or an image URL
    """
    body, files = await read_payload(request)
    artist_data = validate_create_artist(body)
    artist = artist_service.create_artist(db, artist_data, uploader, files.get("image"))
    return {"artist": artist}


@router.put("/{artist_id}", response_model=ArtistEnvelope)
async def update_artist(
    artist_id: str,
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    artist_pk = parse_id(artist_id, "artist ID")
    body, files = await read_payload(request)
    update_data = validate_update_artist(body)
    artist = artist_service.update_artist(db, artist_pk, update_data, uploader, files.get("image"))
    return {"artist": artist}


@router.delete("/{artist_id}", response_model=MessageResponse)
async def delete_artist(
    artist_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Delete an artist together with its songs and albums
    Admin only
    """
    artist_service.delete_artist(db, parse_id(artist_id, "artist ID"))
    return {"message": "Artist deleted successfully"}


@router.post("/{artist_id}/follow", response_model=ArtistFollowResponse)
async def follow_artist(
    artist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    artist = artist_service.follow_artist(db, parse_id(artist_id, "artist ID"), current_user.id)
    return {"message": "Artist followed successfully", "artist": artist}


@router.delete("/{artist_id}/follow", response_model=ArtistFollowResponse)
async def unfollow_artist(
    artist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    artist = artist_service.unfollow_artist(db, parse_id(artist_id, "artist ID"), current_user.id)
    return {"message": "Artist unfollowed successfully", "artist": artist}
