# ============================================================================
# FILE: catalog_api/api/v1/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from typing import Optional
from catalog_api.db.session import get_db
from catalog_api.api.dependencies import get_current_user, require_current_user, read_payload
from catalog_api.core.storage import MediaUploader, get_media_uploader
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.playlist import (
    PlaylistEnvelope,
    PlaylistDetailEnvelope,
    PlaylistListResponse,
    MyPlaylistsResponse,
    PlaylistActionResponse,
    PlaylistFollowResponse,
)
from catalog_api.services.playlist_service import playlist_service
from catalog_api.db.models.user import User
from catalog_api.validators.common import parse_id
from catalog_api.validators.query import validate_search
from catalog_api.validators.playlist import (
    validate_create_playlist,
    validate_update_playlist,
    validate_song_ids,
    validate_collaborator,
)

router = APIRouter()


@router.get("", response_model=PlaylistListResponse)
async def list_public_playlists(search: Optional[str] = None, db: Session = Depends(get_db)):
    return {"playlists": playlist_service.list_public_playlists(db, validate_search(search))}


@router.get("/user/me", response_model=MyPlaylistsResponse)
async def get_my_playlists(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists created by the current user
    Requires authentication
    """
    playlists = playlist_service.get_user_playlists(db, current_user.id, validate_search(search))
    return {"count": len(playlists), "playlists": playlists}


@router.post("", response_model=PlaylistEnvelope, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    body, files = await read_payload(request)
    playlist_data = validate_create_playlist(body)
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data, uploader, files.get("coverImage"))
    return {"playlist": playlist}


@router.get("/{playlist_id}", response_model=PlaylistDetailEnvelope)
async def get_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """
    Get a specific playlist
    Private playlists are only visible to the creator and collaborators
    """
    return {"playlist": playlist_service.get_playlist(db, parse_id(playlist_id, "playlist ID"), current_user)}


@router.put("/{playlist_id}", response_model=PlaylistEnvelope)
async def update_playlist(
    playlist_id: str,
    request: Request,
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details
    Requires authentication and ownership
    """
    playlist_pk = parse_id(playlist_id, "playlist ID")
    body, files = await read_payload(request)
    update_data = validate_update_playlist(body)
    playlist = playlist_service.update_playlist(
        db, playlist_pk, current_user.id, update_data, uploader, files.get("coverImage")
    )
    return {"playlist": playlist}


@router.delete("/{playlist_id}", response_model=MessageResponse)
async def delete_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    playlist_service.delete_playlist(db, parse_id(playlist_id, "playlist ID"), current_user.id)
    return {"message": "Playlist deleted successfully"}


@router.post("/{playlist_id}/songs", response_model=PlaylistActionResponse)
async def add_songs_to_playlist(
    playlist_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add songs to a playlist
    Creator or collaborator; songs already present are skipped
    """
    playlist_pk = parse_id(playlist_id, "playlist ID")
    playlist_service.get_editable(db, playlist_pk, current_user.id)
    body, _ = await read_payload(request)
    song_ids = validate_song_ids(body)
    playlist, added = playlist_service.add_songs(db, playlist_pk, current_user.id, song_ids)
    return {"message": f"Successfully added {added} song(s) to playlist", "playlist": playlist}


@router.delete("/{playlist_id}/songs/{song_id}", response_model=PlaylistActionResponse)
async def remove_song_from_playlist(
    playlist_id: str,
    song_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a song from a playlist
    Creator or collaborator
    """
    playlist = playlist_service.remove_song(
        db, parse_id(playlist_id, "playlist ID"), current_user.id, parse_id(song_id, "song ID")
    )
    return {"message": "Song removed from playlist", "playlist": playlist}


@router.post("/{playlist_id}/collaborators", response_model=PlaylistActionResponse)
async def add_collaborator(
    playlist_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist_pk = parse_id(playlist_id, "playlist ID")
    body, _ = await read_payload(request)
    collaborator_id = validate_collaborator(body)
    playlist = playlist_service.add_collaborator(db, playlist_pk, current_user.id, collaborator_id)
    return {"message": "Collaborator added successfully", "playlist": playlist}


@router.delete("/{playlist_id}/collaborators/{user_id}", response_model=PlaylistActionResponse)
async def remove_collaborator(
    playlist_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist = playlist_service.remove_collaborator(
        db, parse_id(playlist_id, "playlist ID"), current_user.id, parse_id(user_id, "user ID")
    )
    return {"message": "Collaborator removed successfully", "playlist": playlist}


@router.post("/{playlist_id}/follow", response_model=PlaylistFollowResponse)
async def follow_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist = playlist_service.follow_playlist(db, parse_id(playlist_id, "playlist ID"), current_user)
    return {"message": "Playlist followed successfully", "playlist": playlist}


@router.delete("/{playlist_id}/follow", response_model=PlaylistFollowResponse)
async def unfollow_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist = playlist_service.unfollow_playlist(db, parse_id(playlist_id, "playlist ID"), current_user)
    return {"message": "Playlist unfollowed successfully", "playlist": playlist}
