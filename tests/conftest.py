"""Shared fixtures: in-memory SQLite, a seeded business and an authenticated owner."""

import os

# Settings and the engine are built at import time, so the test environment
# has to be in place before anything from the app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-jwt-signing-only"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["SITE_URL"] = "http://localhost:3000"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from app import models  # noqa: F401  registers every table on Base.metadata
from app.core.config import settings
from app.core.security import create_access_token, get_password_hash
from app.database import Base, SessionLocal, engine, get_db
from app.models.business import Business
from app.models.user import User, UserRole
from main import app as api

ADMIN_KEY = "test-admin-key"
OWNER_PASSWORD = "correct-horse-battery"

Base.metadata.create_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture
def client(db):
    def _get_test_db():
        yield db

    api.dependency_overrides[get_db] = _get_test_db
    with TestClient(api) as test_client:
        yield test_client
    api.dependency_overrides.clear()


@pytest.fixture
def business(db):
    business = Business(
        name="Bright Smile Dental",
        vertical="dental",
        address="12 Market St, Philadelphia, PA",
        to_number="+15551234567",
        hours={"mon-fri": "8am-5pm"},
        services=["Cleaning", "Whitening", "Implants"],
        staff=[{"name": "Dr. Rivera", "role": "Dentist"}],
        faqs=[{"q": "Do you take walk-ins?", "a": "Yes, before noon."}],
        onboarding_step=3,
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def owner(db, business):
    user = User(
        business_id=business.id,
        email="owner@brightsmile.com",
        hashed_password=get_password_hash(OWNER_PASSWORD),
        full_name="Dana Owner",
        role=UserRole.owner.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def staff_user(db, business):
    user = User(
        business_id=business.id,
        email="frontdesk@brightsmile.com",
        hashed_password=get_password_hash("staff-password"),
        role=UserRole.staff.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user: User) -> dict:
    token = create_access_token(data={
        "id": user.id,
        "email": user.email,
        "business_id": user.business_id,
        "role": user.role,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(owner):
    return bearer(owner)


@pytest.fixture
def admin_headers():
    return {"x-admin-key": ADMIN_KEY}


@pytest.fixture
def demo_business(db):
    business = Business(
        id=settings.DEMO_BUSINESS_ID,
        name="Demo Med Spa",
        vertical="medspa",
        to_number=settings.DEMO_PHONE_NUMBER,
        is_demo=True,
        is_active=True,
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def headers_for():
    return bearer
