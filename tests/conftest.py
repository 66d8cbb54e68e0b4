import os

# Settings are read at import time, so these must be set before pocketbook is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from pocketbook.database import Base, SessionLocal, engine
from pocketbook.main import app
from pocketbook.services import accounts

from .factories import signup


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return accounts.register(db, "alice", "correct-horse")


@pytest.fixture
def other_user(db):
    return accounts.register(db, "mallory", "battery-staple")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    return signup(client)
