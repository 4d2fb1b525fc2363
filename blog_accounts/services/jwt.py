"""JWT session token service."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from blog_accounts.config import get_settings


class JWTService:
    """Issues and verifies signed session tokens.

    Tokens carry only the user id and an absolute expiry. There is no server-side
    session table, so a token stays valid until it expires even after logout.
    """

    def __init__(self) -> None:
        settings = get_settings()
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.expire_minutes = settings.SESSION_EXPIRE_MINUTES

    def create_token(self, user_id: int) -> str:
        """Create a session token for the given user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a token. Returns None on bad signature, bad format or expiry."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if not str(payload.get("sub", "")).isdigit():
            return None
        return payload


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
