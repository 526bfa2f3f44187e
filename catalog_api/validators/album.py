# ============================================================================
# FILE: catalog_api/validators/album.py
# ============================================================================
from typing import Any, Dict
from catalog_api.schemas.album import AlbumCreate, AlbumUpdate
from catalog_api.validators.common import (
    require_string,
    optional_string,
    require_positive_int,
    parse_bool,
    parse_date,
)


def validate_create_album(body: Dict[str, Any]) -> AlbumCreate:
    title = require_string(body.get("title"), "title")
    artist_id = require_positive_int(body.get("artistId"), "artistId")

    is_explicit = False
    if body.get("isExplicit") is not None:
        is_explicit = parse_bool(body["isExplicit"], "isExplicit")

    return AlbumCreate(
        title=title,
        artist_id=artist_id,
        release_date=parse_date(body.get("releaseDate"), "releaseDate"),
        genre=optional_string(body.get("genre")),
        description=optional_string(body.get("description")),
        cover_image=optional_string(body.get("coverImage")),
        is_explicit=is_explicit,
    )


def validate_update_album(body: Dict[str, Any]) -> AlbumUpdate:
    data = {}

    if "title" in body:
        data["title"] = require_string(body["title"], "title")
    if "artistId" in body:
        data["artist_id"] = require_positive_int(body["artistId"], "artistId")
    if "releaseDate" in body:
        data["release_date"] = parse_date(body["releaseDate"], "releaseDate")
    if "genre" in body:
        data["genre"] = optional_string(body["genre"])
    if "description" in body:
        data["description"] = optional_string(body["description"])
    if "coverImage" in body:
        data["cover_image"] = optional_string(body["coverImage"])
    if "isExplicit" in body:
        data["is_explicit"] = parse_bool(body["isExplicit"], "isExplicit")

    return AlbumUpdate(**data)
