import os

# Point the app at a throwaway database before main is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import schemas
from browse import derive_age
from database import Base, get_db
from main import app

# --- Test Database Setup ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email, password="s3cret-pass"):
    response = client.post("/users/", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()


def login(client, email, password="s3cret-pass"):
    response = client.post("/token", data={"username": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client):
    """Registers a fresh user and returns a function producing bearer headers for them."""
    def _auth_headers(email="aditi@example.com"):
        register(client, email)
        return login(client, email)
    return _auth_headers


TODAY = date(2024, 6, 1)


def make_profile(owner_id, age=None, **fields):
    """An API profile as the browse pipeline sees it, aged relative to TODAY."""
    dob = date(TODAY.year - age, 3, 10) if age is not None else date(1990, 1, 1)
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    profile = schemas.Profile(
        owner_id=owner_id,
        full_name=fields.pop("full_name", f"Person {owner_id}"),
        date_of_birth=dob,
        gender=fields.pop("gender", "female"),
        created_at=now,
        updated_at=now,
        **fields,
    )
    profile.age = derive_age(dob, TODAY) if age is not None else None
    return profile
