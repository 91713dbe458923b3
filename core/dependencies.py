"""
Dependency injection for FastAPI routes.
Provides the Drive client, the operation log and settings.
"""
from functools import lru_cache

from config import get_settings
from core.google.drive_client import DriveClient
from services.log_service import OperationLog


@lru_cache()
def get_drive_client() -> DriveClient:
    """
    Dependency to provide the shared DriveClient instance.

    Built once per process from settings. Tests replace it through
    app.dependency_overrides.

    Usage:
        @router.delete("/delete/{file_id}")
        async def delete(drive_client: DriveClient = Depends(get_drive_client)):
            ...
    """
    return DriveClient.from_settings(get_settings())


@lru_cache()
def get_operation_log() -> OperationLog:
    """
    Dependency to provide the shared OperationLog instance.

    A single instance is required so that its lock serialises all appends.
    """
    return OperationLog(get_settings().log_file_path)
