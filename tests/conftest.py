"""
Shared fixtures.

The application reads its configuration once, at import time, so the
environment is prepared here before `main` is imported. Every test gets
an empty sqlite database: tables are created by the lifespan and dropped
again when the client closes.
"""

import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="hospital-tests-"))
JWT_SECRET = "test-secret"

os.environ.update(
    {
        "APP_TITLE": "Hospital Site API (tests)",
        "APP_VERSION": "1.0.0",
        "ENVIRONMENT": "development",
        "LOG_LEVEL": "WARNING",
        "LOG_FORMAT": "console",
        "AUTH_JWT_SECRET": JWT_SECRET,
        "DB_URL": f"sqlite+aiosqlite:///{_TEST_DIR / 'hospital.db'}",
    }
)
for _unset in ("DB_HOST", "ASSET_CLOUD_NAME", "BOOKING_ENFORCE_UNIQUE_SLOT"):
    os.environ.pop(_unset, None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from main import app


def make_token(sub: str = "user-1", **claims) -> str:
    return jwt.encode({"sub": sub, **claims}, JWT_SECRET, algorithm="HS256")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
        test_client.portal.call(app.state.db_manager.drop_all)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = make_token("admin-1", email="admin@hospital.example", admin=True)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    token = make_token("user-1", email="jane@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'store.db'}"


@pytest.fixture
def cardiology(client, admin_headers) -> dict:
    """One cardiology doctor and one active surgery service."""
    doctor = client.post(
        "/api/v1/admin/doctors",
        json={
            "name": "Dr. Sarah Johnson",
            "specialty": "Cardiologist",
            "department": "Cardiology",
            "experience": 15,
            "rating": 4.9,
            "reviews": 127,
        },
        headers=admin_headers,
    ).json()
    service = client.post(
        "/api/v1/admin/services",
        json={
            "name": "Heart Surgery",
            "description": "Cardiac surgery",
            "department": "Surgery",
            "price": 5000,
            "duration": "4 hours",
            "features": ["Pre-op consult", "", "ICU stay"],
            "isActive": True,
        },
        headers=admin_headers,
    ).json()
    return {"doctor": doctor, "service": service}
