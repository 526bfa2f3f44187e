# ============================================================================
# FILE: catalog_api/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile
from catalog_api.db.session import get_db
from catalog_api.core.exceptions import BadRequestError, ForbiddenError, UnauthorizedError
from catalog_api.core.security import decode_access_token
from catalog_api.db.models.user import User
from typing import Any, Dict, Optional, Tuple
import json

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get current user from the bearer token
    Returns None if no token or invalid token (allows anonymous access)
    """
    if not credentials:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return db.get(User, user_id)


def require_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Not authorized, token failed")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Not authorized, user not found")
    return user


def require_admin(current_user: User = Depends(require_current_user)) -> User:
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized as admin")
    return current_user


async def read_payload(request: Request) -> Tuple[Dict[str, Any], Dict[str, UploadFile]]:
    """
    Read a JSON or form body into (fields, files)

    Empty file inputs are dropped so a blank file field never overrides a
    URL sent alongside it.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        fields: Dict[str, Any] = {}
        files: Dict[str, UploadFile] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    files[key] = value
            elif key in fields:
                # Repeated keys (songIds=1&songIds=2) become a list
                previous = fields[key]
                fields[key] = previous + [value] if isinstance(previous, list) else [previous, value]
            else:
                fields[key] = value
        return fields, files

    raw = await request.body()
    if not raw.strip():
        return {}, {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise BadRequestError("Malformed JSON body")
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body, {}
