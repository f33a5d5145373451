"""
Pytest fixtures for project service tests
"""

from typing import Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from projecthub.config import AppConfig, SecurityConfig
from projecthub.main import create_app
from projecthub.services import AuthService, ProjectService, TaskService
from projecthub.utils.memory_store import InMemoryDatabase
from projecthub.utils.security import PasswordHasher, TokenService

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256-signing"


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


@pytest.fixture
def security_config() -> SecurityConfig:
    """Fast hashing and a fixed signing secret"""
    return SecurityConfig(
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        jwt_access_token_expire_minutes=60,
        bcrypt_rounds=4,
    )


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(storage_backend="memory", log_json=False, log_level="WARNING")


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET, expires_minutes=60)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_service(memory_db, hasher, token_service) -> AuthService:
    return AuthService(memory_db, hasher, token_service)


@pytest.fixture
def project_service(memory_db) -> ProjectService:
    return ProjectService(memory_db)


@pytest.fixture
def task_service(memory_db) -> TaskService:
    return TaskService(memory_db)


@pytest.fixture
def client(app_config, security_config, memory_db):
    """Test client over in-memory storage; the lifespan runs inside the block"""
    app = create_app(app_config=app_config, security_config=security_config, database=memory_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register a user through the API and return its Authorization header"""
    def _register(email: str, password: str = "secret123") -> Dict[str, str]:
        response = client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register


@pytest.fixture
def mock_db_pool():
    """Mock asyncpg database pool"""
    pool = MagicMock()
    conn = AsyncMock()

    # Configure connection context manager
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    # conn.transaction() is a plain call returning an async context manager
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=None)
    conn.transaction = MagicMock(return_value=transaction)

    return pool, conn
