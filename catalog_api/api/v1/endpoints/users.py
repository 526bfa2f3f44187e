# ============================================================================
# FILE: catalog_api/api/v1/endpoints/users.py
# ============================================================================
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from typing import Optional
from catalog_api.db.session import get_db
from catalog_api.api.dependencies import require_current_user, require_admin, read_payload
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.user import AuthResponse, UserEnvelope, ProfileUpdateResponse, UserListResponse
from catalog_api.schemas.song import SongListResponse
from catalog_api.schemas.artist import ArtistListResponse
from catalog_api.schemas.album import AlbumListResponse
from catalog_api.schemas.playlist import PlaylistListResponse
from catalog_api.services.user_service import user_service
from catalog_api.core.security import create_access_token
from catalog_api.db.models.user import User
from catalog_api.validators.common import parse_id
from catalog_api.validators.query import validate_limit, validate_page
from catalog_api.validators.user import validate_register_user, validate_login_user, validate_update_user_profile
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        full_name=user.full_name,
        is_admin=user.is_admin,
        token=create_access_token(user.id),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: Request, db: Session = Depends(get_db)):
    """
    Register a new user account
    Returns the user with a bearer token
    """
    body, _ = await read_payload(request)
    user_data = validate_register_user(body)
    user = user_service.create_user(db, user_data)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(request: Request, db: Session = Depends(get_db)):
    """
    Login with email and password
    Returns JWT access token
    """
    body, _ = await read_payload(request)
    credentials = validate_login_user(body)
    user = user_service.authenticate_user(db, credentials.email, credentials.password)
    logger.info(f"User logged in: {user.id}")
    return _auth_response(user)


@router.get("/profile", response_model=UserEnvelope)
async def get_profile(current_user: User = Depends(require_current_user)):
    return {"user": current_user}


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Partial profile update
    Omitted fields are untouched, empty strings clear a field
    """
    body, _ = await read_payload(request)
    update_data = validate_update_user_profile(body)
    user = user_service.update_profile(db, current_user, update_data)
    return {"message": "Profile updated successfully", "user": user}


@router.get("/me/liked-songs", response_model=SongListResponse)
async def get_liked_songs(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return {"songs": user_service.get_liked_songs(db, current_user.id)}


@router.get("/me/followed-artists", response_model=ArtistListResponse)
async def get_followed_artists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return {"artists": user_service.get_followed_artists(db, current_user.id)}


@router.get("/me/followed-playlists", response_model=PlaylistListResponse)
async def get_followed_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return {"playlists": user_service.get_followed_playlists(db, current_user.id)}


@router.get("/me/saved-albums", response_model=AlbumListResponse)
async def get_saved_albums(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return {"albums": user_service.get_saved_albums(db, current_user.id)}


@router.get("", response_model=UserListResponse)
async def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    List all users, newest first
    Admin only
    """
    users, pagination = user_service.list_users(db, validate_page(page), validate_limit(limit))
    return {"pagination": pagination, "count": len(users), "users": users}


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Delete a user along with their playlists
    Admin only
    """
    user_service.delete_user(db, parse_id(user_id, "user ID"))
    return {"message": "User deleted successfully"}
