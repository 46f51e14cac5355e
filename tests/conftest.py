"""Test configuration and fixtures."""

import os
import tempfile

# Set test environment variables BEFORE importing lexcase
# This must happen at module load time, not in a fixture
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "lexcase_test.db")
os.environ["UPLOAD_DIR"] = os.path.join(tempfile.gettempdir(), "lexcase_uploads")
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["LOG_JSON"] = "false"

import pytest
from fastapi.testclient import TestClient

from lexcase.config import Settings
from lexcase.database import Database
from lexcase.main import create_app
from lexcase.services.google import GoogleIdentity
from lexcase.utils.errors import InvalidCredentials


CASE_PAYLOAD = {
    "case_number": "C-1",
    "case_title": "State v. Doe",
    "client_name": "John Doe",
    "court_name": "District Court",
    "case_type": "Criminal",
    "filing_date": "2024-03-01",
    "description": "Initial filing",
}


class FakeGoogleVerifier:
    """Stands in for Google: only credentials registered here verify."""

    def __init__(self):
        self.identities = {}

    def register(self, credential: str, identity: GoogleIdentity) -> None:
        self.identities[credential] = identity

    async def verify(self, credential: str) -> GoogleIdentity:
        if credential not in self.identities:
            raise InvalidCredentials("Invalid Google credential")
        return self.identities[credential]


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a per-test database and upload directory."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'lexcase.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def google():
    return FakeGoogleVerifier()


@pytest.fixture
def app(test_settings, google):
    app = create_app(test_settings)
    app.state.google_verifier = google
    return app


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def database(test_settings):
    """Store handle on the same database file the app uses."""
    db = Database(test_settings.DATABASE_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def register(client):
    def _register(name="Amy", email="amy@x.com", password="password123"):
        response = client.post(
            "/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register


@pytest.fixture
def amy(register):
    return register("Amy", "amy@x.com", "password123")


@pytest.fixture
def bob(register):
    return register("Bob", "bob@x.com", "password456")


@pytest.fixture
def create_case(client):
    def _create(headers, **overrides):
        payload = {**CASE_PAYLOAD, **overrides}
        response = client.post("/cases", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create
