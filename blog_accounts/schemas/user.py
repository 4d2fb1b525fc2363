"""Pydantic schemas for account endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    # Presence is checked by the service so missing fields get the account error shape
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(CamelModel):
    email: str | None = None


class ResetPasswordRequest(CamelModel):
    password: str | None = None


class UserResponse(CamelModel):
    """Public view of a user. Never includes the password hash or reset state."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    bio: str
    occupation: str
    photo_url: str
    instagram: str
    facebook: str
    linkedin: str
    github: str
    created_at: datetime
    updated_at: datetime


class MessageResponse(CamelModel):
    success: bool
    message: str


class UserEnvelope(MessageResponse):
    user: UserResponse


class UserListResponse(MessageResponse):
    total: int
    users: list[UserResponse]
