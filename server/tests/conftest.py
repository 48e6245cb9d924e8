from __future__ import annotations

import os
from collections.abc import Generator

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mohalla.auth.deps import get_current_user
from mohalla.core.db import Base, get_db
from mohalla.main import app
from mohalla.models.house import House
from mohalla.models.user import Role, User

SQLALCHEMY_TEST_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(SQLALCHEMY_TEST_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def override_get_db() -> Generator[Session, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def authorize(client: TestClient):
    def _apply(user: User):
        app.dependency_overrides[get_current_user] = lambda: user

    yield _apply
    app.dependency_overrides.pop(get_current_user, None)


def _ensure_role(session: Session, name: str) -> Role:
    role = session.query(Role).filter_by(name=name).first()
    if role is None:
        role = Role(name=name)
        session.add(role)
        session.commit()
        session.refresh(role)
    return role


def _make_user(session: Session, email: str, full_name: str, role_name: str) -> User:
    role = _ensure_role(session, role_name)
    user = User(email=email, full_name=full_name, is_active=True)
    user.roles.append(role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture()
def editor_user(db_session: Session) -> User:
    return _make_user(db_session, "editor@example.com", "Directory Editor", "Editor")


@pytest.fixture()
def viewer_user(db_session: Session) -> User:
    return _make_user(db_session, "viewer@example.com", "Directory Viewer", "Viewer")


@pytest.fixture()
def add_house(db_session: Session):
    def _add(number: str, street: str = "Main Street", members: list | None = None, **fields) -> House:
        house = House(number=number, street=street, **fields)
        house.members = members or []
        db_session.add(house)
        db_session.commit()
        db_session.refresh(house)
        return house

    return _add
