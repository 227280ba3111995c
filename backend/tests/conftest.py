import pytest
from fastapi.testclient import TestClient

from lawvault.config import Settings
from lawvault.main import create_app


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides) -> Settings:
        values = dict(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            upload_dir=str(tmp_path / "uploads"),
            bcrypt_rounds=4,
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_client(make_settings):
    clients = []

    def _make(raise_server_exceptions: bool = True, **overrides) -> TestClient:
        app = create_app(make_settings(**overrides))
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"
