"""User account API endpoints."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_accounts.database import get_db
from blog_accounts.dependencies import CurrentUser, clear_auth_cookie, get_current_user, set_auth_cookie
from blog_accounts.errors import InternalError
from blog_accounts.rate_limit import limiter
from blog_accounts.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)
from blog_accounts.services.account import get_account_service
from blog_accounts.services.auth import get_auth_service
from blog_accounts.services.jwt import get_jwt_service
from blog_accounts.services.mail import get_mail_service
from blog_accounts.services.media import get_media_service

logger = logging.getLogger("blog_accounts")

router = APIRouter(prefix="/api/v1/user", tags=["Users"])

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent."


@router.post("/register", response_model=MessageResponse, status_code=201)
@limiter.limit("5/minute")
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Create a new account."""
    try:
        get_auth_service().register(db, body.first_name, body.last_name, body.email, body.password)
    except SQLAlchemyError:
        logger.exception("Registration failed")
        raise InternalError("Failed to register") from None
    return MessageResponse(success=True, message="Account Created Successfully")


@router.post("/login", response_model=UserEnvelope)
@limiter.limit("10/minute")
def login(request: Request, response: Response, body: LoginRequest, db: Session = Depends(get_db)) -> UserEnvelope:
    """Check credentials and set the session cookie."""
    try:
        user = get_auth_service().authenticate(db, body.email, body.password)
    except SQLAlchemyError:
        logger.exception("Login failed")
        raise InternalError("Failed to Login") from None

    set_auth_cookie(response, get_jwt_service().create_token(user.id))
    return UserEnvelope(
        success=True,
        message=f"Welcome back {user.first_name}",
        user=UserResponse.model_validate(user),
    )


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Tell the client to drop its session cookie."""
    clear_auth_cookie(response)
    return MessageResponse(success=True, message="Logged out successfully.")


@router.put("/profile/update", response_model=UserEnvelope)
async def update_profile(
    first_name: str | None = Form(None, alias="firstName"),
    last_name: str | None = Form(None, alias="lastName"),
    occupation: str | None = Form(None),
    bio: str | None = Form(None),
    instagram: str | None = Form(None),
    facebook: str | None = Form(None),
    linkedin: str | None = Form(None),
    github: str | None = Form(None),
    file: UploadFile | None = File(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserEnvelope:
    """Update the caller's profile, optionally replacing the profile photo."""
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "occupation": occupation,
        "bio": bio,
        "instagram": instagram,
        "facebook": facebook,
        "linkedin": linkedin,
        "github": github,
    }
    try:
        updated = await get_account_service().update_profile(db, user.user_id, fields, file, get_media_service())
    except SQLAlchemyError:
        logger.exception("Profile update failed for user %s", user.user_id)
        raise InternalError("Failed to update profile") from None

    return UserEnvelope(
        success=True,
        message="profile updated successfully",
        user=UserResponse.model_validate(updated),
    )


@router.get("/all-users", response_model=UserListResponse)
def get_all_users(db: Session = Depends(get_db)) -> UserListResponse:
    """List every user without credentials."""
    try:
        users = get_account_service().list_users(db)
    except SQLAlchemyError:
        logger.exception("Error fetching user list")
        raise InternalError("Failed to fetch users") from None

    return UserListResponse(
        success=True,
        message="User list fetched successfully",
        total=len(users),
        users=[UserResponse.model_validate(u) for u in users],
    )


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit("3/minute")
def forgot_password(request: Request, body: ForgotPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Email a reset link. The answer never reveals whether the account exists."""
    try:
        get_auth_service().request_password_reset(db, body.email, get_mail_service())
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Password reset request failed")
    return MessageResponse(success=True, message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password/{token}", response_model=MessageResponse)
@limiter.limit("5/minute")
def reset_password(
    request: Request, token: str, body: ResetPasswordRequest, db: Session = Depends(get_db)
) -> MessageResponse:
    """Set a new password using a reset token."""
    try:
        get_auth_service().reset_password(db, token, body.password)
    except SQLAlchemyError:
        logger.exception("Password reset failed")
        raise InternalError("Server error") from None
    return MessageResponse(success=True, message="Password has been reset successfully. You can now login.")


@router.delete("/delete-account", response_model=MessageResponse)
def delete_account(
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete the caller's account and all of their posts."""
    try:
        get_account_service().delete_account(db, user.user_id)
    except SQLAlchemyError:
        logger.exception("Account deletion failed for user %s", user.user_id)
        raise InternalError("Failed to delete account") from None

    clear_auth_cookie(response)
    return MessageResponse(success=True, message="Account deleted successfully")
