"""
tests/conftest.py
=================
Shared pytest fixtures: in-memory SQLite, the FastAPI app with get_db
overridden, and factories for users, jobs and auth headers.
"""
import os

# Settings are read at import time; configure before importing jobtracker
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import itertools
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.database import Base, get_db, json_serializer
from jobtracker.main import app
from jobtracker.models.job import Job
from jobtracker.models.users import User
from jobtracker.schemas.user import TokenData
from jobtracker.utils.hashing import get_password_hash
from jobtracker.utils.tokenJWT import create_access_token


# ─── Engine (one shared connection) ──────────────────────────────────────────

@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=json_serializer,
    )
    return engine


@pytest.fixture
def session_factory(db_engine):
    """Fresh schema per test."""
    Base.metadata.create_all(db_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    Base.metadata.drop_all(db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def foreign_keys(db_engine, session_factory):
    """Enforce FK constraints on the shared SQLite connection, as Postgres does."""
    with db_engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")
    yield
    with db_engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=OFF")


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Factories ───────────────────────────────────────────────────────────────

# bcrypt is slow; hash the shared test password once
_PASSWORD = "secret123"
_PASSWORD_HASH = get_password_hash(_PASSWORD)


@pytest.fixture
def password():
    return _PASSWORD


@pytest.fixture
def make_user(db_session):
    counter = itertools.count(1)

    def _f(role="admin", **kw):
        n = next(counter)
        defaults = {
            "email": f"{role}{n}@als.com",
            "name": f"{role.title()} {n}",
            "password_hash": _PASSWORD_HASH,
            "role": role,
            "is_active": True,
        }
        if role == "client":
            defaults["party_name"] = "Acme Traders"
        if role == "vendor":
            defaults["transporter_name"] = "Fast Logistics Ltd"
        defaults.update(kw)
        user = User(**defaults)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _f


@pytest.fixture
def make_job(db_session):
    counter = itertools.count(1)

    def _f(**kw):
        n = next(counter)
        defaults = {
            "date": datetime(2024, 1, 1),
            "job_number": f"JOB-{n:03d}",
            "invoice_number": f"INV-{n:03d}",
            "party_name": "Acme Traders",
            "container_type": "FCL",
            "shipping_line": "Maersk",
            "destination": "Dubai",
            "vessel": None,
            "truck": f"TRK-{n:03d}",
            "container_numbers": [f"MSKU{n:07d}"],
            "port": "Jebel Ali",
            "cut_off_date": datetime(2024, 1, 5),
            "etd": datetime(2024, 1, 10),
            "transporter": "Fast Logistics Ltd",
            "status": "pending",
        }
        defaults.update(kw)
        job = Job(**defaults)
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _f


@pytest.fixture
def identity_for():
    """Decoded token identity for a user, as the access guard would supply it."""
    def _f(user: User) -> TokenData:
        return TokenData(
            user_id=user.id,
            email=user.email,
            role=user.role,
            party_name=user.party_name if user.role == "client" else None,
            transporter_name=user.transporter_name if user.role == "vendor" else None,
        )
    return _f


@pytest.fixture
def headers_for():
    def _f(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}
    return _f


@pytest.fixture
def job_payload():
    """Valid job creation body in wire (camelCase) form."""
    def _f(**kw) -> dict:
        body = {
            "date": "2024-02-01T00:00:00",
            "jobNumber": "JOB-100",
            "invoiceNumber": "INV-100",
            "partyName": "Acme Traders",
            "containerType": "FCL",
            "shippingLine": "Maersk",
            "destination": "Dubai",
            "truck": "TRK-100",
            "containerNumbers": ["MSKU0000100"],
            "port": "Jebel Ali",
            "cutOffDate": "2024-01-28T00:00:00",
            "etd": "2024-02-05T00:00:00",
            "transporter": "Fast Logistics Ltd",
        }
        body.update(kw)
        return body
    return _f
