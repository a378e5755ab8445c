"""
Shared pytest fixtures for the Waman CMS API tests.

This module provides:
- An isolated in-memory SQLite engine per test (tables created from the SQLModel metadata)
- A RetryExecutor that never sleeps
- A TestClient wired to the test engine through app.dependency_overrides
- An admin account + bearer token for the write endpoints

Environment variables are set before any `waman` import so the module-level
settings and engine never touch a real database file.
"""

import os

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from waman.db.retry import RetryExecutor
from waman.db.session import ConnectionPool, build_engine, get_pool, init_db
from waman.features.resources.services import ResourceGateway
from waman.main import app

ADMIN_EMAIL = "admin@waman.ma"
ADMIN_PASSWORD = "s3cret-pass"


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database, shared by every session of the test."""
    test_engine = build_engine("sqlite://")
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def sleeps() -> List[float]:
    """Delays requested by the executor, in order."""
    return []


@pytest.fixture
def executor(sleeps: List[float]) -> RetryExecutor:
    return RetryExecutor(lambda: None, max_attempts=3, base_delay=0.1, sleep=sleeps.append)


@pytest.fixture
def gateway(session: Session, executor: RetryExecutor) -> ResourceGateway:
    return ResourceGateway(session, executor)


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """
    Client without the startup hook: tables already exist on the test engine.
    """
    app.dependency_overrides[get_pool] = lambda: ConnectionPool(engine)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(session: Session):
    from waman.core.config import jwt_settings
    from waman.db.repositories.admin_users import AdminUserRepository
    from waman.features.authentication.services import AuthService

    auth = AuthService(user_repo=AdminUserRepository(session), jwt_settings=jwt_settings)
    return auth.ensure_admin(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name="Admin")


@pytest.fixture
def auth_headers(client: TestClient, admin) -> Dict[str, str]:
    response = client.post(
        "/api/v1/auth/sign-in",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


# =============================================================================
# Sample payloads
# =============================================================================


@pytest.fixture
def partner_payload() -> Dict[str, Any]:
    return {"name": "ONEE", "category": "Institutionnel", "logo": ""}


@pytest.fixture
def project_payload() -> Dict[str, Any]:
    return {
        "titleFr": "Station d'épuration",
        "descriptionFr": "Conception et suivi des travaux",
        "client": "Commune de Settat",
        "year": "2023",
        "status": "terminé",
        "achievements": ["a", "b"],
    }
