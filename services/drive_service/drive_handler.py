"""
Drive request handlers.
Each handler runs one linear pipeline: Drive call(s), then one operation
log record. The first exception aborts the pipeline and nothing is logged.
"""
import os
import tempfile
from typing import BinaryIO, Optional, Tuple

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from core.google.drive_client import DriveClient
from core.exceptions import NoFileUploadedError, FileTooLargeError, TempFileError
from core.utils.logger import setup_logger
from services.drive_service.models import DriveFile
from services.log_service import OperationLog, OperationLogEntry, OperationType

logger = setup_logger(__name__)

UNKNOWN_FILENAME = "Unknown"
DEFAULT_MIME_TYPE = "application/octet-stream"
SPOOL_CHUNK_SIZE = 1024 * 1024


# ============================================================================
# Temporary upload files
# ============================================================================

def _spool_to_temp_file(source: BinaryIO, upload_dir: str, max_size: int) -> str:
    """
    Copy an incoming upload to a temporary file under upload_dir.

    Raises:
        FileTooLargeError: If more than max_size bytes arrive (temp file removed)
        TempFileError: If the temporary file can't be created or written
    """
    try:
        os.makedirs(upload_dir, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=upload_dir, prefix="upload-")
    except OSError as e:
        raise TempFileError(
            message=f"Could not create temporary upload file: {str(e)}",
            detail={"upload_dir": upload_dir}
        )

    written = 0
    try:
        with os.fdopen(fd, "wb") as out:
            while True:
                chunk = source.read(SPOOL_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    raise FileTooLargeError(
                        message="File too large",
                        detail={"max_upload_size_bytes": max_size}
                    )
                out.write(chunk)
    except FileTooLargeError:
        _discard_temp_file(temp_path)
        raise
    except OSError as e:
        _discard_temp_file(temp_path)
        raise TempFileError(
            message=f"Could not write temporary upload file: {str(e)}",
            detail={"upload_dir": upload_dir}
        )

    return temp_path


def _remove_temp_file(temp_path: str) -> None:
    """Remove a spooled upload, raising TempFileError on failure."""
    try:
        os.remove(temp_path)
    except OSError as e:
        raise TempFileError(
            message=f"Could not remove temporary upload file: {str(e)}",
            detail={"path": temp_path}
        )


def _discard_temp_file(temp_path: str) -> None:
    """Best-effort removal while another error is already propagating."""
    try:
        os.remove(temp_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"Failed to remove temporary upload file {temp_path}: {str(e)}")


def _create_from_temp_file(
    drive_client: DriveClient,
    temp_path: str,
    name: str,
    mime_type: str
) -> dict:
    with open(temp_path, "rb") as stream:
        return drive_client.create_file(stream, name, mime_type)


# ============================================================================
# Handlers
# ============================================================================

async def handle_upload(
    upload: Optional[UploadFile],
    drive_client: DriveClient,
    operation_log: OperationLog,
    upload_dir: str,
    max_upload_size_bytes: int
) -> DriveFile:
    """
    Upload a multipart file to Drive.

    Pipeline:
    1. Reject a missing file
    2. Spool the upload to a temporary file (enforcing the size limit)
    3. Stream the temporary file to Drive
    4. Remove the temporary file
    5. Record an `upload` log entry

    The temporary file is removed whether the Drive call succeeds or fails.

    Args:
        upload: Multipart file, or None if the request carried none
        drive_client: Authenticated Drive client
        operation_log: Shared operation log
        upload_dir: Directory for temporary upload files
        max_upload_size_bytes: Largest accepted upload

    Returns:
        DriveFile with the provider-assigned id and name

    Raises:
        NoFileUploadedError: No file attached (400)
        FileTooLargeError: Upload exceeds the limit (413)
        TempFileError: Local filesystem failure (500)
        DriveException: Any Drive failure (500)
    """
    if upload is None or not upload.filename:
        raise NoFileUploadedError(message="No file uploaded")

    name = upload.filename
    mime_type = upload.content_type or DEFAULT_MIME_TYPE
    logger.info(f"Handling upload of '{name}' ({mime_type})")

    temp_path = await run_in_threadpool(
        _spool_to_temp_file, upload.file, upload_dir, max_upload_size_bytes
    )

    try:
        result = await run_in_threadpool(
            _create_from_temp_file, drive_client, temp_path, name, mime_type
        )
    except Exception:
        _discard_temp_file(temp_path)
        raise

    await run_in_threadpool(_remove_temp_file, temp_path)

    drive_file = DriveFile.model_validate(result)
    await operation_log.record(OperationLogEntry(
        operation_type=OperationType.UPLOAD,
        filename=drive_file.name or name,
        file_id=drive_file.id or ""
    ))

    logger.info(f"Upload complete: {drive_file.id}")
    return drive_file


async def _lookup_name(drive_client: DriveClient, file_id: str) -> str:
    """Fetch a file's display name; a failure aborts the calling handler."""
    info = await run_in_threadpool(drive_client.get_file, file_id, "name")
    return info.get("name") or UNKNOWN_FILENAME


async def handle_delete(
    file_id: str,
    drive_client: DriveClient,
    operation_log: OperationLog
) -> int:
    """
    Delete a Drive file.

    The name is looked up first only for the log entry, but a failed lookup
    (e.g. unknown id) still fails the whole request.

    Returns:
        HTTP status Drive reported for the delete
    """
    logger.info(f"Handling delete of {file_id}")

    filename = await _lookup_name(drive_client, file_id)
    status_code = await run_in_threadpool(drive_client.delete_file, file_id)

    await operation_log.record(OperationLogEntry(
        operation_type=OperationType.DELETE,
        filename=filename,
        file_id=file_id
    ))
    return status_code


async def _publish(
    file_id: str,
    fields: str,
    drive_client: DriveClient
) -> Tuple[str, DriveFile]:
    filename = await _lookup_name(drive_client, file_id)
    await run_in_threadpool(drive_client.grant_public_read_permission, file_id)
    links = await run_in_threadpool(drive_client.get_file, file_id, fields)
    return filename, DriveFile.model_validate(links)


async def handle_share(
    file_id: str,
    drive_client: DriveClient,
    operation_log: OperationLog
) -> DriveFile:
    """
    Make a file public and return its view and download links.

    Logs a `public_URL` entry carrying the view link.
    """
    logger.info(f"Handling share of {file_id}")

    filename, links = await _publish(file_id, "webViewLink, webContentLink", drive_client)

    await operation_log.record(OperationLogEntry(
        operation_type=OperationType.PUBLIC_URL,
        filename=filename,
        file_id=file_id,
        url=links.web_view_link or ""
    ))
    return links


async def handle_download_link(
    file_id: str,
    drive_client: DriveClient,
    operation_log: OperationLog
) -> Optional[str]:
    """
    Make a file public and return its direct download link.

    Logs a `download_URL` entry carrying the link.
    """
    logger.info(f"Handling download link for {file_id}")

    filename, links = await _publish(file_id, "webContentLink", drive_client)

    await operation_log.record(OperationLogEntry(
        operation_type=OperationType.DOWNLOAD_URL,
        filename=filename,
        file_id=file_id,
        url=links.web_content_link or ""
    ))
    return links.web_content_link
