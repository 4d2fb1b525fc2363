"""Profile updates, user listing and account deletion."""

import logging

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_accounts.errors import NotFound, ValidationError
from blog_accounts.models.blog_post import BlogPost
from blog_accounts.models.user import User
from blog_accounts.services.media import MediaService, get_media_service

logger = logging.getLogger("blog_accounts")

PROFILE_FIELDS = ("first_name", "last_name", "occupation", "bio", "instagram", "facebook", "linkedin", "github")
REQUIRED_FIELDS = ("first_name", "last_name")


class AccountService:
    """Mutates and removes user accounts."""

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def list_users(self, db: Session) -> list[User]:
        """Get all users, oldest first."""
        return db.query(User).order_by(User.created_at, User.id).all()

    def validate_profile_fields(self, fields: dict[str, str | None]) -> dict[str, str]:
        """Drop absent fields and reject unknown or blank required ones."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        changes = {name: value for name, value in fields.items() if value is not None}
        for name in REQUIRED_FIELDS:
            if name in changes:
                changes[name] = changes[name].strip()
                if not changes[name]:
                    raise ValidationError("First and last name cannot be empty")
        return changes

    def apply_profile_update(
        self, db: Session, user: User, changes: dict[str, str], photo_url: str | None = None
    ) -> User:
        """Write validated changes. Fields not in `changes` are left as they are."""
        for name, value in changes.items():
            setattr(user, name, value)
        if photo_url:
            user.photo_url = photo_url
        db.commit()
        db.refresh(user)
        return user

    async def update_profile(
        self,
        db: Session,
        user_id: int,
        fields: dict[str, str | None],
        photo: UploadFile | None = None,
        media: MediaService | None = None,
    ) -> User:
        """Apply a partial profile update, uploading the photo first if one is given.

        A failed upload aborts the whole update before anything is written.
        """
        user = self.get_user(db, user_id)
        changes = self.validate_profile_fields(fields)

        photo_url = None
        if photo is not None:
            media = media or get_media_service()
            photo_url = await media.upload_profile_photo(user.id, photo)

        return self.apply_profile_update(db, user, changes, photo_url)

    def delete_account(self, db: Session, user_id: int) -> int:
        """Delete the user and every post they authored in one transaction.

        Returns the number of posts removed. An id with no account is a no-op.
        """
        try:
            removed_posts = (
                db.query(BlogPost).filter(BlogPost.author_id == user_id).delete(synchronize_session=False)
            )
            db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.expire_all()

        logger.info("Deleted user %s and %d post(s)", user_id, removed_posts)
        return removed_posts


_account_service: AccountService | None = None


def get_account_service() -> AccountService:
    """Get singleton account service instance."""
    global _account_service
    if _account_service is None:
        _account_service = AccountService()
    return _account_service
