# ============================================================================
# FILE: catalog_api/api/v1/endpoints/albums.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import Optional
from catalog_api.db.session import get_db
from catalog_api.api.dependencies import require_current_user, require_admin, read_payload
from catalog_api.core.storage import MediaUploader, get_media_uploader
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.album import (
    AlbumEnvelope,
    AlbumDetailEnvelope,
    AlbumListResponse,
    LimitedAlbumListResponse,
    AlbumSongsResponse,
    AlbumSongRemovedResponse,
)
from catalog_api.services.album_service import album_service
from catalog_api.db.models.user import User
from catalog_api.validators.common import parse_id, parse_id_list
from catalog_api.validators.query import validate_limit, validate_search, validate_artist_id
from catalog_api.validators.album import validate_create_album, validate_update_album

router = APIRouter()


@router.get("", response_model=AlbumListResponse)
async def list_albums(
    search: Optional[str] = None,
    artist_id: Optional[str] = Query(None, alias="artistId"),
    db: Session = Depends(get_db)
):
    """List albums, latest release first"""
    albums = album_service.list_albums(db, validate_search(search), validate_artist_id(artist_id))
    return {"albums": albums}


@router.get("/new-releases", response_model=LimitedAlbumListResponse)
async def get_new_releases(limit: Optional[str] = None, db: Session = Depends(get_db)):
    limit_value = validate_limit(limit)
    albums = album_service.get_new_releases(db, limit_value)
    return {"count": len(albums), "limit": limit_value, "albums": albums}


@router.get("/{album_id}", response_model=AlbumDetailEnvelope)
async def get_album(album_id: str, db: Session = Depends(get_db)):
    return {"album": album_service.get_album(db, parse_id(album_id, "album ID"))}


@router.post("", response_model=AlbumEnvelope, status_code=status.HTTP_201_CREATED)
async def create_album(
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    """
    Create an album
    Admin only; accepts a `coverImage` file or URL
    """
    body, files = await read_payload(request)
    album_data = validate_create_album(body)
    album = album_service.create_album(db, album_data, uploader, files.get("coverImage"))
    return {"album": album}


@router.put("/{album_id}/add-songs", response_model=AlbumSongsResponse)
async def add_songs_to_album(
    album_id: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Assign songs to an album
    Every song must belong to the album's artist, otherwise nothing changes
    """
    album_pk = parse_id(album_id, "album ID")
    body, _ = await read_payload(request)
    song_ids = parse_id_list(body.get("songIds"), "songIds")
    album, added = album_service.add_songs(db, album_pk, song_ids)
    return {"message": f"Successfully added {added} song(s) to album", "album": album}


@router.put("/{album_id}/remove-song/{song_id}", response_model=AlbumSongRemovedResponse)
async def remove_song_from_album(
    album_id: str,
    song_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    album, song = album_service.remove_song(db, parse_id(album_id, "album ID"), parse_id(song_id, "song ID"))
    return {"message": "Song removed from album successfully", "song": song, "album": album}


@router.put("/{album_id}", response_model=AlbumEnvelope)
async def update_album(
    album_id: str,
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    album_pk = parse_id(album_id, "album ID")
    body, files = await read_payload(request)
    update_data = validate_update_album(body)
    album = album_service.update_album(db, album_pk, update_data, uploader, files.get("coverImage"))
    return {"album": album}


@router.delete("/{album_id}", response_model=MessageResponse)
async def delete_album(
    album_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    album_service.delete_album(db, parse_id(album_id, "album ID"))
    return {"message": "Album deleted successfully"}


@router.post("/{album_id}/save", response_model=MessageResponse)
async def save_album(
    album_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    album_service.save_album(db, parse_id(album_id, "album ID"), current_user.id)
    return {"message": "Album saved to library"}


@router.delete("/{album_id}/save", response_model=MessageResponse)
async def unsave_album(
    album_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    album_service.unsave_album(db, parse_id(album_id, "album ID"), current_user.id)
    return {"message": "Album removed from library"}
