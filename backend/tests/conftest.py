import pytest
from fastapi.testclient import TestClient

from shop_api.config import Settings
from shop_api.main import create_app

TEST_DATABASE_URL = "sqlite://"

# ============================================================================
# Test Database Setup
# ============================================================================
# 1. Each test gets its own app, and so its own in-memory Store
# 2. Store uses StaticPool for in-memory SQLite so all sessions share one DB
# 3. The client fixture enters TestClient as a context manager so the
#    lifespan runs: connect + auto-migrate happen exactly as in production
# 4. Tests using the session fixture migrate explicitly instead


@pytest.fixture(name="app")
def app_fixture():
    return create_app(Settings(database_url=TEST_DATABASE_URL))


@pytest.fixture(name="client")
def client_fixture(app):
    """Provide a test client bound to a fresh in-memory database"""
    with TestClient(app) as client:
        yield client


@pytest.fixture(name="session")
def session_fixture(app):
    """Provide a session on the app's store, without starting the app"""
    store = app.state.store
    store.migrate()

    with store.session() as session:
        yield session

    store.dispose()


@pytest.fixture
def create_user(client: TestClient):
    """POST a user and return the response body"""

    def _create(first_name: str, last_name: str):
        response = client.post("/api/users", json={"first_name": first_name, "last_name": last_name})
        assert response.status_code == 200
        return response.json()

    return _create
