"""Shared fixtures: an isolated repository per test and an API client bound to it."""

import os
import tempfile
from typing import Generator, List

_TMP_ROOT = tempfile.mkdtemp(prefix="fileshare_tests_")
os.environ.setdefault("FILESHARE_SECRET_KEY", "test-secret")
os.environ.setdefault("FILESHARE_DATABASE_URL", f"sqlite:///{os.path.join(_TMP_ROOT, 'default.db')}")
os.environ.setdefault("FILESHARE_FILESTORE_PATH", os.path.join(_TMP_ROOT, "static"))
os.environ.setdefault("FILESHARE_LOG_PATH", os.path.join(_TMP_ROOT, "recode.log"))
os.environ.setdefault("FILESHARE_MANAGE_PASSWORD", "123456")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from fileshare.db import make_engine
from fileshare.deps import get_repository
from fileshare.errors import PersistenceError
from fileshare.gateway import SqlGateway
from fileshare.main import app
from fileshare.repository import Repository
from fileshare.storage import LocalStorage


class MemoryGateway:
    """Keeps saved state in memory; ``fail`` makes every save raise, ``fail_files`` only the file save."""

    def __init__(self):
        self.forest = []
        self.files = []
        self.fail = False
        self.fail_files = False
        self.saves = 0

    def load_forest(self):
        return [d.model_copy(deep=True) for d in self.forest]

    def save_forest(self, forest):
        if self.fail:
            raise PersistenceError("save_forest", OSError("disk full"))
        self.saves += 1
        self.forest = [d.model_copy(deep=True) for d in forest]

    def load_files(self):
        return [f.model_copy() for f in self.files]

    def save_files(self, files):
        if self.fail or self.fail_files:
            raise PersistenceError("save_files", OSError("disk full"))
        self.saves += 1
        self.files = [f.model_copy() for f in files]


class RecordingStorage:
    """Byte store that only remembers which paths it was asked to delete."""

    def __init__(self, error: Exception = None):
        self.deleted: List[str] = []
        self.error = error

    def delete_bytes(self, path: str) -> None:
        if self.error is not None:
            raise self.error
        self.deleted.append(path)


@pytest.fixture()
def gateway() -> MemoryGateway:
    return MemoryGateway()


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def failing_storage() -> RecordingStorage:
    return RecordingStorage(error=PermissionError("locked"))


@pytest.fixture()
def memory_repo(gateway, storage) -> Repository:
    return Repository(gateway, storage)


@pytest.fixture()
def sql_engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'fileshare.db'}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def repo(sql_engine, tmp_path) -> Repository:
    repository = Repository(SqlGateway(sql_engine), LocalStorage(tmp_path / "static"))
    repository.load()
    return repository


@pytest.fixture()
def client(repo) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers(client) -> dict:
    resp = client.post("/fileshare/manage/api/admin/login", json={"password": "123456"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
