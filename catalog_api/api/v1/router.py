# ============================================================================
# FILE: catalog_api/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from catalog_api.api.v1.endpoints import users, artists, songs, albums, playlists

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(artists.router, prefix="/artists", tags=["artists"])
api_router.include_router(songs.router, prefix="/songs", tags=["songs"])
api_router.include_router(albums.router, prefix="/albums", tags=["albums"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
