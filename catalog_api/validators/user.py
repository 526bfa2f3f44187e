# ============================================================================
# FILE: catalog_api/validators/user.py
# ============================================================================
from typing import Any, Dict
from catalog_api.core.exceptions import BadRequestError
from catalog_api.schemas.user import UserCreate, UserLogin, UserUpdate
from catalog_api.validators.common import optional_string, parse_bool

MIN_EMAIL_LENGTH = 6

# Request key -> schema field for nullable profile fields
PROFILE_FIELDS = {
    "fullName": "full_name",
    "username": "username",
    "address": "address",
    "phoneNumber": "phone_number",
    "profilePicture": "profile_picture",
}


def _credentials(body: Dict[str, Any]):
    email = body.get("email")
    password = body.get("password")
    if not isinstance(email, str) or email.strip() == "" or not isinstance(password, str) or password.strip() == "":
        raise BadRequestError("Email and password are required")
    return email.strip(), password.strip()


def is_valid_email(email: str) -> bool:
    return "@" in email and len(email.strip()) >= MIN_EMAIL_LENGTH


def validate_register_user(body: Dict[str, Any]) -> UserCreate:
    email, password = _credentials(body)
    if len(email) < MIN_EMAIL_LENGTH:
        raise BadRequestError(f"Email length needs to be {MIN_EMAIL_LENGTH} characters or more")
    if not is_valid_email(email):
        raise BadRequestError("Invalid email format")

    is_admin = False
    if body.get("isAdmin") is not None:
        is_admin = parse_bool(body["isAdmin"], "isAdmin")

    return UserCreate(
        email=email,
        password=password,
        username=optional_string(body.get("username")),
        full_name=optional_string(body.get("fullName")),
        address=optional_string(body.get("address")),
        is_admin=is_admin,
    )


def validate_login_user(body: Dict[str, Any]) -> UserLogin:
    email, password = _credentials(body)
    return UserLogin(email=email, password=password)


def validate_update_user_profile(body: Dict[str, Any]) -> UserUpdate:
    """Present-but-empty clears a field, absent leaves it untouched"""
    data = {}
    for key, field in PROFILE_FIELDS.items():
        if key in body:
            data[field] = optional_string(body[key])

    if "password" in body:
        password = body["password"]
        if not isinstance(password, str) or password.strip() == "":
            raise BadRequestError("Password must be a non-empty string")
        data["password"] = password.strip()

    return UserUpdate(**data)
