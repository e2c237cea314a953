import os

# Settings are read at import time; provide test values before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-org-roster")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from org_roster.database import get_db
from org_roster.models.base import Base
from org_roster.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from org_roster.models.member import Member
from org_roster.models.committee import Committee
from org_roster.models.committee_membership import CommitteeMembership
from org_roster.models.role import RoleName
from org_roster.models.role_assignment import Assigned, UNASSIGNED
# Import FastAPI app AFTER model imports
from org_roster.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(user_id: str = "test-user-123", expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": user_id, "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def headers_for(member: Member) -> dict:
    """Authorization headers for an existing member"""
    return {"Authorization": f"Bearer {create_test_token(user_id=member.auth_user_id)}"}


@pytest.fixture
def make_member(db_session):
    """
    Factory creating a member directly in the database.

    role=None creates a rejected applicant. is_active follows the role
    unless given explicitly.
    """

    def _make(auth_user_id: str, role: RoleName | None = RoleName.MEMBER, **fields) -> Member:
        member = Member(auth_user_id=auth_user_id, **fields)
        member.set_assignment(Assigned(role) if role is not None else UNASSIGNED)
        if "is_active" in fields:
            member.is_active = fields["is_active"]
        db_session.add(member)
        db_session.commit()
        db_session.refresh(member)
        return member

    return _make


@pytest.fixture
def site_admin(make_member):
    return make_member("admin-1", RoleName.DATA_SYSTEMS_OFFICER, first_name="Ada", last_name="Admin")


@pytest.fixture
def president(make_member):
    return make_member("president-1", RoleName.PRESIDENT, first_name="Pat", last_name="President")


@pytest.fixture
def vice_president(make_member):
    return make_member("vp-1", RoleName.VICE_PRESIDENT, first_name="Val", last_name="Vice")


@pytest.fixture
def finance_officer(make_member):
    return make_member("finance-1", RoleName.FINANCE_OFFICER, first_name="Fin", last_name="Officer")


@pytest.fixture
def regular_member(make_member):
    return make_member("member-1", RoleName.MEMBER, first_name="Mel", last_name="Member")


@pytest.fixture
def pending_applicant(make_member):
    return make_member("pending-1", RoleName.PENDING_USER, first_name="Pen", last_name="Ding")


@pytest.fixture
def auth_headers(site_admin):
    """Authorization headers for the site admin"""
    return headers_for(site_admin)
