"""Registration, login and password reset."""

import logging
import re
import secrets
from datetime import timedelta

import bcrypt
from jinja2 import TemplateError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_accounts.config import get_settings
from blog_accounts.errors import (
    ConflictError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    UpstreamFailure,
    ValidationError,
)
from blog_accounts.models.user import ResetState, User, utcnow
from blog_accounts.services.mail import MailService, render_email

logger = logging.getLogger("blog_accounts")

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 6
RESET_EMAIL_SUBJECT = "Password Reset Request"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def validate_password(password: str | None) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def _describe_minutes(minutes: int) -> str:
    if minutes % 60 == 0:
        hours = minutes // 60
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"


class AuthService:
    """Handles user registration, authentication and the password reset flow."""

    def get_user_by_email(self, db: Session, email: str) -> User | None:
        """Exact-match lookup; emails are case-sensitive as stored."""
        return db.query(User).filter(User.email == email).first()

    def register(self, db: Session, first_name: str, last_name: str, email: str, password: str) -> User:
        """Register a new user.

        Raises ValidationError for missing or malformed input and ConflictError when
        the email is already taken.
        """
        if not all(value and value.strip() for value in (first_name, last_name, email)) or not password:
            raise ValidationError("All fields are required")

        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email")

        validate_password(password)

        if self.get_user_by_email(db, email):
            raise ConflictError("Email already exists")

        user = User(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email,
            password_hash=hash_password(password),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.rollback()
            raise ConflictError("Email already exists") from None
        db.refresh(user)

        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, db: Session, email: str | None, password: str | None) -> User:
        """Authenticate a user by email and password.

        Unknown email and wrong password raise the same InvalidCredentials error.
        """
        if not email or not password:
            raise ValidationError("All fields are required")

        user = self.get_user_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentials("Invalid email or password")

        user.last_login_at = utcnow()
        db.commit()
        db.refresh(user)
        return user

    def request_password_reset(self, db: Session, email: str | None, mailer: MailService) -> None:
        """Issue a reset token for the account and email the reset link.

        Does nothing for unknown addresses. If the email cannot be delivered, the token
        is discarded again so it can never be used. The caller must answer identically
        in every case.
        """
        if not email:
            return

        user = self.get_user_by_email(db, email)
        if not user:
            return

        settings = get_settings()
        token = secrets.token_hex(32)
        reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{token}"
        try:
            html = render_email(
                "email/password_reset.html",
                first_name=user.first_name,
                reset_url=reset_url,
                expires_in=_describe_minutes(settings.RESET_TOKEN_EXPIRE_MINUTES),
            )
        except TemplateError:
            logger.exception("Failed to render reset email for user %s", user.id)
            return

        user.begin_password_reset(token, utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES))
        db.commit()

        try:
            mailer.send_html(user.email, RESET_EMAIL_SUBJECT, html)
        except UpstreamFailure:
            user.clear_password_reset()
            db.commit()
            logger.warning("Reset email for user %s not delivered; reset token discarded", user.id)
            return

        logger.info("Password reset requested for user %s", user.id)

    def reset_password(self, db: Session, token: str, new_password: str | None) -> User:
        """Consume a reset token and set a new password.

        Raises ValidationError for a too-short password and InvalidOrExpiredToken when
        the token does not match a pending, unexpired reset.
        """
        validate_password(new_password)

        user = (
            db.query(User)
            .filter(
                User.password_reset_token == token,
                User.reset_state == ResetState.RESET_PENDING.value,
            )
            .first()
        )
        if not user or not token:
            raise InvalidOrExpiredToken("Invalid or expired token")

        if user.reset_token_expired():
            user.clear_password_reset()
            db.commit()
            raise InvalidOrExpiredToken("Invalid or expired token")

        user.password_hash = hash_password(new_password)
        user.clear_password_reset()
        db.commit()
        db.refresh(user)

        logger.info("Password reset completed for user %s", user.id)
        return user


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
