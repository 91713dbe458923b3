"""
Google Drive file endpoints.
Handles upload, delete, share and download-link operations.
"""
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from api.schemas.request import FileIdPath
from api.schemas.response import (
    UploadResponse,
    DeleteResponse,
    ShareResponse,
    DownloadLinkResponse,
    ErrorResponse,
)
from config import Settings, get_settings
from core.dependencies import get_drive_client, get_operation_log
from core.google.drive_client import DriveClient
from core.utils.logger import setup_logger
from services.drive_service.drive_handler import (
    handle_upload,
    handle_delete,
    handle_share,
    handle_download_link,
)
from services.log_service import OperationLog

logger = setup_logger(__name__)
drive_router = APIRouter(
    prefix="",
    tags=["drive"],
    responses={500: {"model": ErrorResponse}}
)


@drive_router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}}
)
async def upload_file(
    file: Union[UploadFile, str, None] = File(None),
    drive_client: DriveClient = Depends(get_drive_client),
    operation_log: OperationLog = Depends(get_operation_log),
    settings: Settings = Depends(get_settings)
):
    """
    Upload a multipart file (field `file`) to Google Drive.

    A plain text value in the `file` field counts as no file attached.

    Returns:
        UploadResponse with the Drive file id and name

    Raises:
        NoFileUploadedError: No file attached (400)
        FileTooLargeError: Over the configured size limit (413)
        DriveException: Drive call failed (500)
    """
    upload = file if isinstance(file, StarletteUploadFile) else None

    try:
        drive_file = await handle_upload(
            upload=upload,
            drive_client=drive_client,
            operation_log=operation_log,
            upload_dir=settings.upload_dir,
            max_upload_size_bytes=settings.max_upload_size_bytes
        )
    finally:
        if upload is not None:
            await upload.close()

    return UploadResponse(id=drive_file.id or "", name=drive_file.name or "")


@drive_router.delete("/delete/{file_id}", response_model=DeleteResponse)
async def delete_file(
    file_id: FileIdPath,
    drive_client: DriveClient = Depends(get_drive_client),
    operation_log: OperationLog = Depends(get_operation_log)
):
    """
    Permanently delete a Drive file.

    Raises:
        DriveFileNotFoundError: Unknown id (500)
        DriveAccessDeniedError: Not allowed to delete (500)
    """
    status_code = await handle_delete(file_id, drive_client, operation_log)
    return DeleteResponse(status=status_code)


@drive_router.get(
    "/share/{file_id}",
    response_model=ShareResponse,
    response_model_exclude_none=True
)
async def share_file(
    file_id: FileIdPath,
    drive_client: DriveClient = Depends(get_drive_client),
    operation_log: OperationLog = Depends(get_operation_log)
):
    """
    Grant anyone-with-the-link read access and return Drive's view and
    download links.
    """
    links = await handle_share(file_id, drive_client, operation_log)
    return ShareResponse(
        webViewLink=links.web_view_link,
        webContentLink=links.web_content_link
    )


@drive_router.get(
    "/download/{file_id}",
    response_model=DownloadLinkResponse,
    response_model_exclude_none=True
)
async def generate_download_link(
    file_id: FileIdPath,
    drive_client: DriveClient = Depends(get_drive_client),
    operation_log: OperationLog = Depends(get_operation_log)
):
    """
    Grant anyone-with-the-link read access and return the direct download link.
    """
    link = await handle_download_link(file_id, drive_client, operation_log)
    return DownloadLinkResponse(webContentLink=link)
