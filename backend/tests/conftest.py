import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["OPENAI_API_KEY"] = ""
os.environ["IDENTITY_TOKEN_SECRET"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from talenthub.core.exceptions import DependencyUnavailableError  # noqa: E402
from talenthub.database import Base, get_db  # noqa: E402
from talenthub.main import app  # noqa: E402
from talenthub.services.achievements import ensure_default_achievements  # noqa: E402
from talenthub.services.ai import get_ai_client  # noqa: E402

engine = create_engine(
    os.environ["DATABASE_URL"],
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


class FakeAIClient:
    """Stands in for the OpenAI-backed client; tests set what it returns."""

    def __init__(self):
        self.enabled = False
        self.fail = False
        self.recommendations = []
        self.analysis = None
        self.calls = 0

    def generate_task_recommendations(self, sport, metrics, skill_level, history):
        self.calls += 1
        if self.fail:
            raise DependencyUnavailableError("AI request failed.")
        return list(self.recommendations)

    def analyze_injury_risk(self, athlete_data):
        self.calls += 1
        if self.fail:
            raise DependencyUnavailableError("AI request failed.")
        return self.analysis


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def reset_database() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        ensure_default_achievements(db)
        db.commit()
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _prepare_db():
    reset_database()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def ai_client() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture()
def client(ai_client: FakeAIClient):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def register_user(client: TestClient, external_id: str, name: str, role: str = "athlete", **profile) -> dict:
    response = client.post(
        "/users",
        json={"external_id": external_id, "display_name": name, "role": role, **profile},
    )
    assert response.status_code in (200, 201), response.text
    return response.json()


def identity(external_id: str) -> dict[str, str]:
    return {"X-External-Id": external_id}
