# ============================================================================
# FILE: catalog_api/validators/query.py
# Query-string filters; invalid optional filters fall back instead of failing
# ============================================================================
from typing import Optional
from catalog_api.config import settings
from catalog_api.validators.common import parse_int


def validate_limit(raw_limit: Optional[str], default_limit: int = None, max_limit: int = None) -> int:
    """Default when missing, non-numeric or <= 0; capped at max_limit"""
    default_limit = default_limit or settings.DEFAULT_LIMIT
    max_limit = max_limit or settings.MAX_LIMIT
    if not raw_limit:
        return default_limit
    parsed = parse_int(raw_limit)
    if parsed is None or parsed <= 0:
        return default_limit
    return min(parsed, max_limit)


def validate_page(raw_page: Optional[str]) -> int:
    parsed = parse_int(raw_page) if raw_page else None
    if parsed is None or parsed <= 0:
        return 1
    return parsed


def calculate_skip(page: int, limit: int) -> int:
    return (page - 1) * limit


def validate_search(search: Optional[str]) -> Optional[str]:
    if not search or search.strip() == "":
        return None
    return search.strip()


def validate_genre(genre: Optional[str]) -> Optional[str]:
    if not genre or genre.strip() == "":
        return None
    return genre.strip()


def validate_artist_id(raw_artist_id: Optional[str]) -> Optional[int]:
    if not raw_artist_id:
        return None
    parsed = parse_int(raw_artist_id)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def validate_verified(verified: Optional[str]) -> Optional[bool]:
    if verified == "true":
        return True
    if verified == "false":
        return False
    return None
