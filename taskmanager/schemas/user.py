from datetime import datetime
from typing import Optional

from pydantic import AnyHttpUrl, ConfigDict, EmailStr, Field, field_validator
from taskmanager.schemas.task import CamelModel


def normalize_email(value: str) -> str:
    return value.strip().lower()


# bcrypt ne lit que 72 octets (pas caractères)
BCRYPT_MAX_BYTES = 72


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("Password cannot exceed 72 bytes")
    return value


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    display_name: Optional[str] = Field(None, max_length=50)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def password_bytes(cls, value):
        return check_password_bytes(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)


class GoogleSignInRequest(CamelModel):
    google_id: str = Field(min_length=1)
    email: EmailStr
    display_name: Optional[str] = Field(None, max_length=50)
    avatar: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value)


class UpdateProfileRequest(CamelModel):
    display_name: Optional[str] = Field(None, max_length=50)
    avatar: Optional[AnyHttpUrl] = None

    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        if changes.get("avatar") is not None:
            changes["avatar"] = str(self.avatar)
        return changes


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=72)

    @field_validator("new_password")
    @classmethod
    def password_bytes(cls, value):
        return check_password_bytes(value)


class DeleteAccountRequest(CamelModel):
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    """Profil public : jamais de mot de passe"""

    id: int
    email: str
    display_name: Optional[str]
    avatar: Optional[str]
    google_id: Optional[str]
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


def public_profile(user) -> dict:
    return UserResponse.model_validate(user).model_dump(by_alias=True, mode="json")
