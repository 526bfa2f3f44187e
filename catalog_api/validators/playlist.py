# ============================================================================
# FILE: catalog_api/validators/playlist.py
# ============================================================================
from typing import Any, Dict, List
from catalog_api.schemas.playlist import PlaylistCreate, PlaylistUpdate
from catalog_api.validators.common import (
    require_string,
    optional_string,
    require_positive_int,
    parse_bool,
    parse_id_list,
)


def validate_create_playlist(body: Dict[str, Any]) -> PlaylistCreate:
    name = require_string(body.get("name"), "name")

    is_public = True
    if body.get("isPublic") is not None:
        is_public = parse_bool(body["isPublic"], "isPublic")

    return PlaylistCreate(
        name=name,
        description=optional_string(body.get("description")),
        is_public=is_public,
        cover_image=optional_string(body.get("coverImage")),
    )


def validate_update_playlist(body: Dict[str, Any]) -> PlaylistUpdate:
    data = {}

    if "name" in body:
        data["name"] = require_string(body["name"], "name")
    if "description" in body:
        data["description"] = optional_string(body["description"])
    if "isPublic" in body:
        data["is_public"] = parse_bool(body["isPublic"], "isPublic")
    if "coverImage" in body:
        data["cover_image"] = optional_string(body["coverImage"])

    return PlaylistUpdate(**data)


def validate_song_ids(body: Dict[str, Any]) -> List[int]:
    return parse_id_list(body.get("songIds"), "songIds")


def validate_collaborator(body: Dict[str, Any]) -> int:
    return require_positive_int(body.get("userId"), "userId")
