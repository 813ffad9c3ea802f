"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it, and small factories for seeding users and posts.
"""
import itertools
import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_fact_check_provider
from app.db.base import Base
from app.db.models import Post, User
from app.db.session import get_db
from app.main import app
from app.services.fact_check.provider import FactCheckProvider

logger = logging.getLogger(__name__)

# One shared connection so every session sees the same in-memory database
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mock_provider():
    return FactCheckProvider(enable_mock=True)


@pytest.fixture
def client(db, mock_provider):
    """TestClient without the lifespan, so startup table creation never touches a real database."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_fact_check_provider] = lambda: mock_provider
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(name=None, email=None, **kwargs):
        n = next(counter)
        user = User(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            **kwargs
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_post(db, make_user):
    def _make(user=None, **kwargs):
        author = user or make_user()
        kwargs.setdefault("question", "What is the capital of France?")
        kwargs.setdefault("answer", "Paris is the capital of France.")
        post = Post(user_id=author.id, **kwargs)
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make
