"""Pytest fixtures for the gazette backend.

Provides reusable test fixtures for:
- In-memory SQLite database with a fresh schema per test
- Secretarias (tenants) and users for every role
- Matters in different lifecycle states, with attachments
- A TestClient wired to the test session and a token factory

Usage:
    def test_download(client, auth_headers, secretaria_user, pdf_attachment):
        response = client.get(
            f"/attachments/{pdf_attachment.id}/download",
            headers=auth_headers(secretaria_user),
        )
        assert response.status_code == 200
"""

import os
import sys
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-256-bits-minimum-length-required-for-security")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper-secret-key-32-chars-long")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("AUTH_BYPASS", "false")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from auth.jwt import create_access_token
from auth.password import hash_password
from config import get_settings
from database import get_db as database_get_db
from domain.matters import MatterStatus
from models import Base, Matter, MatterAttachment, Secretaria, User

TEST_PASSWORD = "Diario2024"

# One shared in-memory database; StaticPool keeps the single connection alive
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around every test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Argon2id hash of TEST_PASSWORD, computed once (hashing is slow)."""
    return hash_password(TEST_PASSWORD, get_settings())


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def semed(db_session: Session) -> Secretaria:
    secretaria = Secretaria(name="Secretaria Municipal de Educação", acronym="SEMED")
    db_session.add(secretaria)
    db_session.commit()
    return secretaria


@pytest.fixture
def semus(db_session: Session) -> Secretaria:
    secretaria = Secretaria(name="Secretaria Municipal de Saúde", acronym="SEMUS")
    db_session.add(secretaria)
    db_session.commit()
    return secretaria


def _make_user(db: Session, password_hash: str, email: str, role: str, secretaria_id=None, active=True) -> User:
    user = User(
        name=email.split("@")[0].title(),
        email=email,
        password_hash=password_hash,
        role=role,
        secretaria_id=secretaria_id,
        active=active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_user(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Factory for extra users: make_user("x@y.gov.br", "secretaria", secretaria_id=1)."""
    def _factory(email: str, role: str, secretaria_id=None, active=True) -> User:
        return _make_user(db_session, password_hash, email, role, secretaria_id, active)
    return _factory


@pytest.fixture
def admin_user(make_user) -> User:
    """Create an admin user (no secretaria)."""
    return make_user("admin@diario.example.gov.br", "admin")


@pytest.fixture
def semad_user(make_user) -> User:
    """Create a SEMAD reviewer (no secretaria, cross-tenant)."""
    return make_user("revisor@semad.example.gov.br", "semad")


@pytest.fixture
def secretaria_user(make_user, semed: Secretaria) -> User:
    """Create a department user scoped to SEMED."""
    return make_user("joana@semed.example.gov.br", "secretaria", secretaria_id=semed.id)


@pytest.fixture
def other_secretaria_user(make_user, semus: Secretaria) -> User:
    """Create a department user scoped to SEMUS."""
    return make_user("carlos@semus.example.gov.br", "secretaria", secretaria_id=semus.id)


@pytest.fixture
def publico_user(make_user) -> User:
    return make_user("cidadao@example.com", "publico")


@pytest.fixture
def make_matter(db_session: Session) -> Callable[..., Matter]:
    def _factory(secretaria: Secretaria, status: str = MatterStatus.DRAFT.value, title: str = "Portaria nº 12/2026") -> Matter:
        matter = Matter(title=title, status=status, secretaria_id=secretaria.id)
        db_session.add(matter)
        db_session.commit()
        db_session.refresh(matter)
        return matter
    return _factory


@pytest.fixture
def make_attachment(db_session: Session) -> Callable[..., MatterAttachment]:
    """Factory that also keeps matter.has_attachments in sync."""
    def _factory(matter: Matter, original_name: str = "portaria.pdf",
                 mime_type: str = "application/pdf", file_size: int = 10240) -> MatterAttachment:
        attachment = MatterAttachment(
            matter_id=matter.id,
            original_name=original_name,
            mime_type=mime_type,
            file_size=file_size,
        )
        db_session.add(attachment)
        matter.has_attachments = True
        db_session.commit()
        db_session.refresh(attachment)
        return attachment
    return _factory


@pytest.fixture
def draft_matter(make_matter, semed: Secretaria) -> Matter:
    return make_matter(semed)


@pytest.fixture
def pdf_attachment(make_attachment, draft_matter: Matter) -> MatterAttachment:
    return make_attachment(draft_matter)


@pytest.fixture
def make_token() -> Callable[[User], str]:
    def _factory(user: User) -> str:
        return create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
            settings=get_settings(),
        )
    return _factory


@pytest.fixture
def auth_headers(make_token) -> Callable[[User], Dict[str, str]]:
    def _factory(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user)}"}
    return _factory


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create an unauthenticated test client bound to the test session."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def enable_bypass(monkeypatch):
    """Turn AUTH_BYPASS on for a single test."""
    monkeypatch.setenv("AUTH_BYPASS", "true")
    get_settings.cache_clear()
