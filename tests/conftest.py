"""Shared fixtures for the Drive Gateway tests."""
import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from core.dependencies import get_drive_client, get_operation_log
from main import app
from services.log_service import OperationLog
from tests.fixtures.fake_drive import FakeDriveClient

TEST_MAX_UPLOAD_SIZE = 64


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "log.txt"


@pytest.fixture
def test_settings(upload_dir, log_path) -> Settings:
    return Settings(
        environment="test",
        upload_dir=str(upload_dir),
        log_file_path=str(log_path),
        max_upload_size_bytes=TEST_MAX_UPLOAD_SIZE,
    )


@pytest.fixture
def fake_drive() -> FakeDriveClient:
    return FakeDriveClient()


@pytest.fixture
def operation_log(log_path) -> OperationLog:
    return OperationLog(log_path)


@pytest.fixture
def client(test_settings, fake_drive, operation_log):
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_drive_client] = lambda: fake_drive
    app.dependency_overrides[get_operation_log] = lambda: operation_log
    yield TestClient(app)
    app.dependency_overrides.clear()
