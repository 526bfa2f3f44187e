# ============================================================================
# FILE: catalog_api/schemas/user.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from catalog_api.schemas.common import CamelModel, Pagination


class UserCreate(BaseModel):
    """Schema for user registration"""
    email: str
    password: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    address: Optional[str] = None
    is_admin: bool = False


class UserLogin(BaseModel):
    """Schema for user login"""
    email: str
    password: str


class UserUpdate(BaseModel):
    """Partial profile update; only fields in model_fields_set are applied"""
    full_name: Optional[str] = None
    username: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for user response"""
    id: int
    email: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    profile_picture: Optional[str] = None
    is_admin: bool
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Returned by register and login"""
    id: int
    email: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool
    token: str


class UserEnvelope(CamelModel):
    user: UserResponse


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class UserListResponse(CamelModel):
    pagination: Pagination
    count: int
    users: List[UserResponse]
