# ============================================================================
# FILE: catalog_api/validators/common.py
# Primitive sanitizers shared by the per-entity validators
# ============================================================================
from datetime import date, datetime
from typing import Any, List, Optional
from catalog_api.core.exceptions import BadRequestError
import math
import re

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_EDGE_QUOTES = re.compile(r"^[\"']|[\"']$")

MAX_DB_INT = 2 ** 63 - 1
MIN_DB_INT = -(2 ** 63)


def clean_string(value: str) -> str:
    """Trim and drop one leading and one trailing quote character"""
    return _EDGE_QUOTES.sub("", value.strip())


def require_string(value: Any, field: str) -> str:
    if value is None:
        raise BadRequestError(f"{field} is required")
    if not isinstance(value, str):
        raise BadRequestError(f"{field} must be a string")
    cleaned = clean_string(value)
    if cleaned == "":
        raise BadRequestError(f"{field} must be a non-empty string")
    return cleaned


def optional_string(value: Any) -> Optional[str]:
    """Empty, blank or null input becomes None"""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    cleaned = clean_string(value)
    return cleaned or None


def parse_int(value: Any) -> Optional[int]:
    """
    Base-10 integer parsing of the leading digits

    "42" -> 42, "12abc" -> 12, "abc" -> None. Values outside the signed
    64-bit range the store can hold are treated as invalid.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if isinstance(value, int):
        parsed = value
    else:
        match = _INT_PREFIX.match(str(value))
        if not match:
            return None
        parsed = int(match.group(1), 10)
    if not MIN_DB_INT <= parsed <= MAX_DB_INT:
        return None
    return parsed


def require_positive_int(value: Any, field: str) -> int:
    if value is None or value == "":
        raise BadRequestError(f"{field} is required")
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        raise BadRequestError(f"Invalid {field}. Must be a positive integer")
    return parsed


def parse_bool(value: Any, field: str) -> bool:
    if value is True or value == "true":
        return True
    if value is False or value == "false":
        return False
    raise BadRequestError(f"{field} must be a boolean or 'true'/'false' string")


def parse_date(value: Any, field: str) -> Optional[date]:
    """ISO date (YYYY-MM-DD) or datetime; empty input clears to None"""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise BadRequestError(f"{field} must be a valid date string or null")
    text = value.strip()
    if text == "":
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise BadRequestError(f"Invalid date format for {field}. Use ISO format (YYYY-MM-DD)")


def parse_id(raw: Any, name: str = "id") -> int:
    """Validate an id taken from the route path"""
    parsed = parse_int(raw)
    if parsed is None or parsed <= 0:
        raise BadRequestError(f"Invalid {name}")
    return parsed


def parse_id_list(value: Any, field: str = "songIds") -> List[int]:
    """Non-empty array of positive ids, order kept, duplicates collapsed"""
    if not isinstance(value, list) or len(value) == 0:
        raise BadRequestError(f"{field} must be a non-empty array")
    ids: List[int] = []
    for raw in value:
        parsed = parse_int(raw)
        if parsed is None or parsed <= 0:
            raise BadRequestError(f"Invalid song ID: {raw}")
        if parsed not in ids:
            ids.append(parsed)
    return ids
