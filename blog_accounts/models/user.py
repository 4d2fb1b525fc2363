"""User model."""

import enum
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text

from blog_accounts.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ResetState(str, enum.Enum):
    """Password reset lifecycle of an account."""

    NORMAL = "normal"
    RESET_PENDING = "reset_pending"


class User(Base):
    """Blog author account."""

    __tablename__ = "user"
    __table_args__ = (
        CheckConstraint(
            "(reset_state = 'normal' AND password_reset_token IS NULL AND password_reset_expires_at IS NULL)"
            " OR (reset_state = 'reset_pending' AND password_reset_token IS NOT NULL"
            " AND password_reset_expires_at IS NOT NULL)",
            name="ck_user_reset_state_consistent",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)

    bio = Column(Text, nullable=False, default="")
    occupation = Column(String(256), nullable=False, default="")
    photo_url = Column(String(1024), nullable=False, default="")
    instagram = Column(String(512), nullable=False, default="")
    facebook = Column(String(512), nullable=False, default="")
    linkedin = Column(String(512), nullable=False, default="")
    github = Column(String(512), nullable=False, default="")

    reset_state = Column(String(16), nullable=False, default=ResetState.NORMAL.value)
    password_reset_token = Column(String(128), nullable=True, index=True)
    password_reset_expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    last_login_at = Column(DateTime, nullable=True)

    @property
    def reset_pending(self) -> bool:
        return self.reset_state == ResetState.RESET_PENDING.value

    def begin_password_reset(self, token: str, expires_at: datetime) -> None:
        """Move to RESET_PENDING with the given token and absolute expiry."""
        if not token or expires_at is None:
            raise ValueError("A reset needs both a token and an expiry")
        self.password_reset_token = token
        self.password_reset_expires_at = expires_at
        self.reset_state = ResetState.RESET_PENDING.value

    def clear_password_reset(self) -> None:
        """Return to NORMAL, dropping token and expiry together."""
        self.password_reset_token = None
        self.password_reset_expires_at = None
        self.reset_state = ResetState.NORMAL.value

    def reset_token_expired(self, now: datetime | None = None) -> bool:
        if self.password_reset_expires_at is None:
            return True
        return self.password_reset_expires_at <= (now or utcnow())
