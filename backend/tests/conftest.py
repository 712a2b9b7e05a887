from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from sunatstock.db.base import Base  # noqa: E402
from sunatstock import models  # noqa: E402,F401
from sunatstock.api.deps import get_db  # noqa: E402
from sunatstock.core.security import create_access_token  # noqa: E402
from sunatstock.main import app  # noqa: E402
from sunatstock.models.medical_item import MedicalItem  # noqa: E402
from sunatstock.models.user import User  # noqa: E402
from sunatstock.schemas.medical_item import MedicalItemCreate  # noqa: E402
from sunatstock.services.item_service import create_medical_item  # noqa: E402


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
    )
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def make_item(db_session):
    def _make(name="Kasa Steril", category="habis_pakai", unit="pcs",
              current_stock=10, minimum_threshold=2, purchase_price=25000.0,
              image_path=None) -> MedicalItem:
        return create_medical_item(
            db_session,
            MedicalItemCreate(
                name=name,
                category=category,
                unit=unit,
                current_stock=current_stock,
                minimum_threshold=minimum_threshold,
                purchase_price=purchase_price,
                image_path=image_path,
            ),
        )
    return _make


@pytest.fixture()
def user(db_session) -> User:
    u = User(username="dokter", password_hash="rahasia", full_name="Dr. Budi")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture()
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.username)}"}
