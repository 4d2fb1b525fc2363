"""Tests for account deletion and the cascade to blog posts."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from blog_accounts.models.blog_post import BlogPost
from blog_accounts.models.user import User
from blog_accounts.services.account import AccountService
from blog_accounts.services.auth import AuthService

DELETE_URL = "/api/v1/user/delete-account"


def _add_posts(db_session: Session, author_id: int, count: int) -> None:
    for i in range(count):
        db_session.add(BlogPost(author_id=author_id, title=f"Post {i}", description="body"))
    db_session.commit()


def _post_count(db_session: Session, author_id: int) -> int:
    db_session.expire_all()
    return db_session.query(BlogPost).filter(BlogPost.author_id == author_id).count()


class TestDeleteAccount:
    """Tests for the delete-account endpoint."""

    def test_delete_removes_user_and_posts(self, client: TestClient, test_user: dict, db_session: Session):
        """The user and every post they wrote are gone; other authors are untouched."""
        other = AuthService().register(db_session, "Other", "Author", "other@example.com", "password456")
        _add_posts(db_session, test_user["user_id"], 3)
        _add_posts(db_session, other.id, 2)

        response = client.delete(DELETE_URL, headers=test_user["headers"])
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Account deleted successfully"}

        assert db_session.query(User).filter(User.id == test_user["user_id"]).first() is None
        assert _post_count(db_session, test_user["user_id"]) == 0
        assert _post_count(db_session, other.id) == 2

    def test_delete_clears_cookie(self, client: TestClient, test_user: dict):
        response = client.delete(DELETE_URL, headers=test_user["headers"])
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=")
        assert "Max-Age=0" in cookie

    def test_login_after_delete_fails(self, client: TestClient, test_user: dict):
        client.delete(DELETE_URL, headers=test_user["headers"])
        response = client.post("/api/v1/user/login", json={"email": "test@example.com", "password": "password123"})
        assert response.status_code == 400

    def test_delete_requires_auth(self, client: TestClient, test_user: dict, db_session: Session):
        response = client.delete(DELETE_URL)
        assert response.status_code == 401
        assert db_session.query(User).filter(User.id == test_user["user_id"]).first() is not None

    def test_database_failure_keeps_everything(self, client: TestClient, test_user: dict, db_session: Session):
        """Both deletes roll back together and the caller sees a generic 500."""
        _add_posts(db_session, test_user["user_id"], 2)

        failure = OperationalError("DELETE", {}, Exception("database is locked"))
        with patch.object(db_session, "commit", side_effect=failure):
            response = client.delete(DELETE_URL, headers=test_user["headers"])

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to delete account"}
        assert _post_count(db_session, test_user["user_id"]) == 2
        assert db_session.query(User).filter(User.id == test_user["user_id"]).first() is not None


class TestAccountServiceDelete:
    """Service-level cascade behaviour."""

    def test_returns_removed_post_count(self, test_user: dict, db_session: Session):
        _add_posts(db_session, test_user["user_id"], 4)
        assert AccountService().delete_account(db_session, test_user["user_id"]) == 4

    def test_missing_account_is_noop(self, db_session: Session):
        assert AccountService().delete_account(db_session, 424242) == 0

    def test_rollback_on_failure(self, test_user: dict, db_session: Session):
        _add_posts(db_session, test_user["user_id"], 1)
        failure = OperationalError("DELETE", {}, Exception("disk I/O error"))
        with patch.object(db_session, "commit", side_effect=failure):
            with pytest.raises(OperationalError):
                AccountService().delete_account(db_session, test_user["user_id"])
        assert _post_count(db_session, test_user["user_id"]) == 1
