"""
Shared fixtures.

The database URL must be in the environment before any app module is
imported, so it is set at the top of this file.
"""

import os
import tempfile
from datetime import datetime

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="expense-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"

from fastapi.testclient import TestClient  # noqa: E402

from core.security import create_access_token  # noqa: E402
from db.database import Base, SessionLocal, engine  # noqa: E402
from db.models import Expense  # noqa: E402
from main import app  # noqa: E402


class Record:
    """Plain stand-in for an Expense row, for the pure aggregation tests."""

    def __init__(self, id, tenant, amount, created_at, user_id=1, deleted_at=None):
        self.id = id
        self.user_id = user_id
        self.tenant = tenant
        self.amount = amount
        self.created_at = created_at
        self.deleted_at = deleted_at


@pytest.fixture
def make_record():
    counter = {"next": 1}

    def _make(tenant, amount, created_at, **kwargs):
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        rec = Record(counter["next"], tenant, amount, created_at, **kwargs)
        counter["next"] += 1
        return rec

    return _make


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    token = create_access_token({"user_id": 1})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_expense(db_session):
    def _seed(tenant, amount, created_at, user_id=1, deleted_at=None):
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        row = Expense(
            user_id=user_id,
            tenant=tenant,
            amount=amount,
            created_at=created_at,
            deleted_at=deleted_at,
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _seed
