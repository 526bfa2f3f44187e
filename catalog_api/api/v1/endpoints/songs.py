# ============================================================================
# FILE: catalog_api/api/v1/endpoints/songs.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import Optional
from catalog_api.db.session import get_db
from catalog_api.api.dependencies import require_current_user, require_admin, read_payload
from catalog_api.core.storage import MediaUploader, get_media_uploader
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.song import SongEnvelope, SongListResponse, LimitedSongListResponse, SongActionResponse
from catalog_api.services.song_service import song_service
from catalog_api.db.models.user import User
from catalog_api.validators.common import parse_id
from catalog_api.validators.query import validate_limit, validate_search, validate_genre, validate_artist_id
from catalog_api.validators.song import validate_create_song, validate_update_song

router = APIRouter()


@router.get("", response_model=SongListResponse)
async def list_songs(
    search: Optional[str] = None,
    genre: Optional[str] = None,
    artist_id: Optional[str] = Query(None, alias="artistId"),
    db: Session = Depends(get_db)
):
    """
    List songs, most played first
    Filters: title search, genre, artistId
    """
    songs = song_service.list_songs(
        db,
        search=validate_search(search),
        genre=validate_genre(genre),
        artist_id=validate_artist_id(artist_id),
    )
    return {"songs": songs}


@router.get("/top", response_model=LimitedSongListResponse)
async def get_top_songs(limit: Optional[str] = None, db: Session = Depends(get_db)):
    """Most played songs; limit defaults to 10 and is capped at 100"""
    limit_value = validate_limit(limit)
    songs = song_service.get_top_songs(db, limit_value)
    return {"count": len(songs), "limit": limit_value, "songs": songs}


@router.get("/new-releases", response_model=LimitedSongListResponse)
async def get_new_releases(limit: Optional[str] = None, db: Session = Depends(get_db)):
    limit_value = validate_limit(limit)
    songs = song_service.get_new_releases(db, limit_value)
    return {"count": len(songs), "limit": limit_value, "songs": songs}


@router.get("/{song_id}", response_model=SongEnvelope)
async def get_song(song_id: str, db: Session = Depends(get_db)):
    return {"song": song_service.get_song(db, parse_id(song_id, "song ID"))}


@router.post("", response_model=SongEnvelope, status_code=status.HTTP_201_CREATED)
async def create_song(
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    """
    Create a song
    Admin only; `coverImage` and `audioUrl` may be sent as files
    """
    body, files = await read_payload(request)
    song_data = validate_create_song(body, has_audio_file="audioUrl" in files)
    song = song_service.create_song(
        db, song_data, uploader,
        cover_file=files.get("coverImage"),
        audio_file=files.get("audioUrl"),
    )
    return {"song": song}


@router.put("/{song_id}", response_model=SongEnvelope)
async def update_song(
    song_id: str,
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    admin: User = Depends(require_admin)
):
    song_pk = parse_id(song_id, "song ID")
    body, files = await read_payload(request)
    update_data = validate_update_song(body)
    song = song_service.update_song(
        db, song_pk, update_data, uploader,
        cover_file=files.get("coverImage"),
        audio_file=files.get("audioUrl"),
    )
    return {"song": song}


@router.delete("/{song_id}", response_model=MessageResponse)
async def delete_song(
    song_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    song_service.delete_song(db, parse_id(song_id, "song ID"))
    return {"message": "Song deleted successfully"}


@router.post("/{song_id}/like", response_model=SongActionResponse)
async def like_song(
    song_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    song = song_service.like_song(db, parse_id(song_id, "song ID"), current_user.id)
    return {"message": "Song liked successfully", "song": song}


@router.delete("/{song_id}/like", response_model=SongActionResponse)
async def unlike_song(
    song_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    song = song_service.unlike_song(db, parse_id(song_id, "song ID"), current_user.id)
    return {"message": "Song unliked successfully", "song": song}


@router.post("/{song_id}/play", response_model=SongActionResponse)
async def record_play(song_id: str, db: Session = Depends(get_db)):
    song = song_service.record_play(db, parse_id(song_id, "song ID"))
    return {"message": "Play recorded", "song": song}
