"""Blog post model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from blog_accounts.database import Base
from blog_accounts.models.user import utcnow


class BlogPost(Base):
    """Post written by a user. Removed together with its author."""

    __tablename__ = "blog_post"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    subtitle = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)
    thumbnail_url = Column(String(1024), nullable=True)
    category = Column(String(128), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
