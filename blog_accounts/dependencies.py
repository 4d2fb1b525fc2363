"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import HTTPException, Request, Response

from blog_accounts.config import get_settings
from blog_accounts.services.jwt import get_jwt_service

AUTH_COOKIE_NAME = "token"


@dataclass
class CurrentUser:
    """Authenticated caller."""

    user_id: int


def get_current_user(request: Request) -> CurrentUser:
    """Extract and validate user from Bearer token or cookie. Raises 401 if invalid."""
    token: str | None = None

    # Check Authorization header first
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:]

    # Fall back to cookie
    if not token:
        token = request.cookies.get(AUTH_COOKIE_NAME)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = get_jwt_service().decode_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return CurrentUser(user_id=int(payload["sub"]))


def set_auth_cookie(response: Response, token: str) -> None:
    """Set the session cookie for cross-origin frontends."""
    settings = get_settings()
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite=settings.COOKIE_SAMESITE,
        secure=settings.COOKIE_SECURE,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Overwrite the session cookie with an already-expired empty value."""
    settings = get_settings()
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value="",
        httponly=True,
        samesite=settings.COOKIE_SAMESITE,
        secure=settings.COOKIE_SECURE,
        max_age=0,
        expires=0,
        path="/",
    )
