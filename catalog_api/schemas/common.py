# ============================================================================
# FILE: catalog_api/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON"""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str


class Pagination(CamelModel):
    current_page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class ArtistBrief(CamelModel):
    id: int
    name: str
    image: Optional[str] = None


class UserBrief(CamelModel):
    id: int
    username: Optional[str] = None
    full_name: Optional[str] = None
    profile_picture: Optional[str] = None
