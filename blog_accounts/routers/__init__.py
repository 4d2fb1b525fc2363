"""API routers."""

from blog_accounts.routers.users import router as users_router

__all__ = ["users_router"]
