import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from taskboard.database import get_session, seed_statuses
from taskboard.main import app


@pytest.fixture(name="engine")
def engine_fixture():
    """Fresh in-memory database with the status reference rows seeded."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_statuses(session)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Test client with the request session pointed at the in-memory database."""
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def ana(client: TestClient) -> dict:
    response = client.post("/users", json={"name": "Ana", "email": "ana@x.com"})
    assert response.status_code == 201
    return response.json()
