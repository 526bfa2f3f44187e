# ============================================================================
# FILE: catalog_api/validators/song.py
# ============================================================================
from typing import Any, Dict, Optional
from catalog_api.core.exceptions import BadRequestError
from catalog_api.schemas.song import SongCreate, SongUpdate
from catalog_api.validators.common import (
    require_string,
    optional_string,
    require_positive_int,
    parse_bool,
    parse_int,
)


def _optional_album_id(value: Any) -> Optional[int]:
    """Empty or null clears the album reference"""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return None
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        raise BadRequestError("Invalid album ID")
    return parsed


def validate_create_song(body: Dict[str, Any], has_audio_file: bool = False) -> SongCreate:
    """
    Validate a create-song payload

    audioUrl is required unless the audio arrives as an uploaded file.
    """
    title = require_string(body.get("title"), "title")
    artist_id = require_positive_int(body.get("artistId"), "artistId")
    duration = require_positive_int(body.get("duration"), "duration")

    audio_url = optional_string(body.get("audioUrl"))
    if audio_url is None and not has_audio_file:
        raise BadRequestError("audioUrl is required")

    is_explicit = False
    if body.get("isExplicit") is not None:
        is_explicit = parse_bool(body["isExplicit"], "isExplicit")

    return SongCreate(
        title=title,
        artist_id=artist_id,
        duration=duration,
        album_id=_optional_album_id(body.get("albumId")),
        genre=optional_string(body.get("genre")),
        audio_url=audio_url,
        cover_image=optional_string(body.get("coverImage")),
        lyric=optional_string(body.get("lyric")),
        is_explicit=is_explicit,
    )


def validate_update_song(body: Dict[str, Any]) -> SongUpdate:
    data = {}

    if "title" in body:
        data["title"] = require_string(body["title"], "title")
    if "artistId" in body:
        data["artist_id"] = require_positive_int(body["artistId"], "artistId")
    if "albumId" in body:
        data["album_id"] = _optional_album_id(body["albumId"])
    if "duration" in body:
        data["duration"] = require_positive_int(body["duration"], "duration")
    if "audioUrl" in body:
        data["audio_url"] = require_string(body["audioUrl"], "audioUrl")
    if "genre" in body:
        data["genre"] = optional_string(body["genre"])
    if "lyric" in body:
        data["lyric"] = optional_string(body["lyric"])
    if "coverImage" in body:
        data["cover_image"] = optional_string(body["coverImage"])
    if "isExplicit" in body:
        data["is_explicit"] = parse_bool(body["isExplicit"], "isExplicit")

    return SongUpdate(**data)
