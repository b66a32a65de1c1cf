"""
Shared test fixtures.
Every test runs against a fresh in-memory SQLite schema.
"""

import os

# must be set before app.db.base builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.core.security import hash_password
from app.db.base import Base, SessionLocal, engine
from app.db.models.category import Category
from app.db.models.review import Review
from app.db.models.user import User
from app.main import app


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    def _make_user(user_id=None, name="Ana Souza", email=None, password="secret"):
        user = User(
            id=user_id,
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}.{user_id or 'x'}@example.com",
            password=hash_password(password),
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_categories(db):
    def _make_categories(*names):
        categories = [Category(name=name, description=f"{name} services") for name in names]
        db.add_all(categories)
        db.commit()
        return [category.id for category in categories]

    return _make_categories


@pytest.fixture
def add_reviews(db):
    def _add_reviews(professional_id, *ratings):
        db.add_all([Review(professional_id=professional_id, rating=rating) for rating in ratings])
        db.commit()

    return _add_reviews
