# ============================================================================
# FILE: catalog_api/validators/artist.py
# ============================================================================
from typing import Any, Dict
from catalog_api.schemas.artist import ArtistCreate, ArtistUpdate
from catalog_api.validators.common import require_string, optional_string, parse_bool, parse_date


def validate_create_artist(body: Dict[str, Any]) -> ArtistCreate:
    name = require_string(body.get("name"), "name")

    verification_status = False
    if body.get("verificationStatus") is not None:
        verification_status = parse_bool(body["verificationStatus"], "verificationStatus")

    return ArtistCreate(
        name=name,
        bio=optional_string(body.get("bio")),
        dob=parse_date(body.get("dob"), "dob"),
        image=optional_string(body.get("image")),
        verification_status=verification_status,
    )


def validate_update_artist(body: Dict[str, Any]) -> ArtistUpdate:
    data = {}

    if "name" in body:
        data["name"] = require_string(body["name"], "name")
    if "bio" in body:
        data["bio"] = optional_string(body["bio"])
    if "dob" in body:
        data["dob"] = parse_date(body["dob"], "dob")
    if "verificationStatus" in body:
        data["verification_status"] = parse_bool(body["verificationStatus"], "verificationStatus")
    if "image" in body:
        data["image"] = optional_string(body["image"])

    return ArtistUpdate(**data)
