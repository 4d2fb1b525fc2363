"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_accounts.database import Base, get_db
from blog_accounts.models.blog_post import BlogPost  # noqa: F401
from blog_accounts.models.user import User  # noqa: F401
from blog_accounts.services.auth import AuthService


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from blog_accounts.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a test user and return its details plus a session token."""
    from blog_accounts.services.jwt import get_jwt_service

    user = AuthService().register(db_session, "Test", "User", "test@example.com", "password123")
    token = get_jwt_service().create_token(user.id)

    return {
        "user_id": user.id,
        "email": user.email,
        "password": "password123",
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }
