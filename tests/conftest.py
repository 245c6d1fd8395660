# tests/conftest.py
import asyncio
import os
import uuid

# Must be set before the app (and its engine) is imported.
os.environ["DB_URL"] = "sqlite+aiosqlite:///./test_tutordesk.db"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tutordesk.db.session import init_db  # noqa: E402
from tutordesk.main import create_app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _reset_db():
    """
    Start every test session from an empty schema.
    """
    asyncio.run(init_db())
    yield


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all tests.

    Uses the application factory so configuration stays test-friendly.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def register_user(client: TestClient, name: str = "Test Tutor") -> dict:
    """
    Register a fresh tutor and return the headers identifying them.
    """
    email = f"tutor-{uuid.uuid4().hex[:12]}@example.com"
    resp = client.post("/users", json={"email": email, "name": name})
    assert resp.status_code == 201, resp.text
    return {"X-User-Id": str(resp.json()["id"])}


@pytest.fixture()
def auth_headers(client) -> dict:
    return register_user(client)


@pytest.fixture()
def other_user_headers(client) -> dict:
    return register_user(client, name="Other Tutor")


@pytest.fixture()
def student_id(client, auth_headers) -> int:
    resp = client.post(
        "/students",
        json={
            "first_name": "Alice",
            "last_name": "Nguyen",
            "email": "alice@example.com",
            "subjects": "Math",
            "hourly_rate": 45.5,
        },
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]
