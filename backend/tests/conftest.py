import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from catalog.auth import issue_token  # noqa: E402
from catalog.database import build_engine, create_tables, get_session  # noqa: E402
from catalog.main import app  # noqa: E402
from catalog.web.app import get_item_client, web_app  # noqa: E402
from catalog.web.item_client import RemoteItemClient  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"
API_BASE_URL = "http://testserver/api"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. build_engine sets check_same_thread=False and turns on foreign keys
# 3. Tables created and dropped per test so ids restart at 1
test_engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on freshly created tables"""
    create_tables(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Item API test client with overridden database session"""
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_token() -> str:
    return issue_token("admin@example.com", roles=["Admin"])


@pytest.fixture
def user_token() -> str:
    return issue_token("shopper@example.com", roles=["Customer"])


@pytest.fixture
def admin_headers(admin_token: str):
    return {"Authorization": f"Bearer {admin_token}"}


class RecordingTransport:
    """Passes requests through to a TestClient and remembers what was sent."""

    def __init__(self, client: TestClient):
        self.client = client
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append((method, url, json))
        return self.client.request(method, url, json=json, headers=headers, timeout=timeout)

    @property
    def urls(self):
        return [f"{method} {url}" for method, url, _ in self.calls]


@pytest.fixture
def transport(client: TestClient) -> RecordingTransport:
    return RecordingTransport(client)


@pytest.fixture
def item_client(transport: RecordingTransport) -> RemoteItemClient:
    return RemoteItemClient(base_url=API_BASE_URL, timeout=5, session=transport)


@pytest.fixture
def web_client(item_client: RemoteItemClient):
    """Web tier test client whose item API calls go to the in-process item API"""
    web_app.dependency_overrides[get_item_client] = lambda: item_client

    with TestClient(web_app) as client:
        yield client

    web_app.dependency_overrides.clear()
