"""
Google Drive client.
Wraps the Drive v3 file and permission operations used by the gateway and
translates provider errors into application exceptions.
"""
import json
import threading
from typing import Any, BinaryIO, Dict, Optional

import httplib2
from google.auth.exceptions import RefreshError
from google_auth_httplib2 import AuthorizedHttp
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from config import Settings
from core.utils.logger import setup_logger
from core.exceptions import (
    DriveFileNotFoundError,
    DriveAccessDeniedError,
    DriveAuthError,
    DriveRequestError,
)

logger = setup_logger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]

# Drive answers a successful files.delete with an empty 204 body
DELETE_SUCCESS_STATUS = 204

PUBLIC_READ_PERMISSION = {
    "role": "reader",
    "type": "anyone",
    "allowFileDiscovery": True,
}


def _error_payload(error: HttpError) -> Any:
    """
    Extract the provider's `error` object from an HttpError body.

    Returns None when the body isn't JSON (e.g. an HTML page from a proxy),
    so callers fall back to the exception message.
    """
    try:
        content = json.loads(error.content.decode("utf-8"))
    except (ValueError, AttributeError, UnicodeDecodeError):
        return None
    if isinstance(content, dict) and "error" in content:
        return content["error"]
    return content


class DriveClient:
    """
    Authenticated Google Drive v3 session.

    One instance is created per process and shared by all requests. All
    methods are blocking; callers in async code run them in a thread pool.
    httplib2 connections are not thread-safe, so each worker thread executes
    requests over its own AuthorizedHttp built from the shared credentials.
    """

    def __init__(self, service, credentials: Optional[Credentials] = None):
        """
        Args:
            service: Drive v3 resource returned by googleapiclient.discovery.build
            credentials: OAuth credentials for per-thread transports; without
                them requests run on the service's own http object
        """
        self.service = service
        self.credentials = credentials
        self._thread_local = threading.local()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DriveClient":
        """
        Build a client from the OAuth refresh-token configuration.

        The access token is obtained lazily on the first request, so a bad
        refresh token surfaces as DriveAuthError from the first call rather
        than at startup.
        """
        credentials = Credentials(
            token=None,
            refresh_token=settings.google_refresh_token,
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            token_uri=GOOGLE_TOKEN_URI,
            scopes=DRIVE_SCOPES,
        )
        service = build("drive", "v3", credentials=credentials, cache_discovery=False)
        logger.info("Google Drive client initialized")
        return cls(service, credentials)

    def _http(self) -> Optional[AuthorizedHttp]:
        """Get or create the authorized transport of the calling thread."""
        if self.credentials is None:
            return None
        if not hasattr(self._thread_local, "http"):
            logger.debug(f"Thread {threading.get_ident()}: creating Drive transport")
            self._thread_local.http = AuthorizedHttp(self.credentials, http=httplib2.Http())
        return self._thread_local.http

    def _execute(self, request, operation: str, file_id: Optional[str] = None):
        """Execute a prepared Drive request, translating failures."""
        try:
            return request.execute(http=self._http())

        except HttpError as e:
            status_code = e.resp.status if e.resp is not None else None
            payload = _error_payload(e)
            detail = {"operation": operation, "file_id": file_id, "error": payload}

            if status_code == 404:
                raise DriveFileNotFoundError(
                    message=f"Drive file not found: {file_id}",
                    detail=detail
                )
            elif status_code == 403:
                raise DriveAccessDeniedError(
                    message=f"Drive access denied for {operation}",
                    detail=detail
                )
            else:
                raise DriveRequestError(
                    message=f"Drive {operation} failed with status {status_code}",
                    detail=detail
                )

        except RefreshError as e:
            raise DriveAuthError(
                message=f"Google OAuth refresh failed: {str(e)}",
                detail={"operation": operation, "file_id": file_id, "error": str(e)}
            )

        except (httplib2.HttpLib2Error, OSError) as e:
            raise DriveRequestError(
                message=f"Drive transport error: {str(e)}",
                detail={"operation": operation, "file_id": file_id, "error": str(e)}
            )

    def create_file(self, stream: BinaryIO, name: str, mime_type: str) -> Dict[str, Any]:
        """
        Upload content as a new Drive file.

        Args:
            stream: Open binary file object to read the content from
            name: Display name for the new file
            mime_type: Content type of the upload

        Returns:
            Dict with the provider-assigned `id` and `name`

        Raises:
            DriveAccessDeniedError: Quota exceeded or destination not writable
            DriveRequestError: For other Drive errors
        """
        logger.info(f"Uploading '{name}' ({mime_type}) to Drive")

        media = MediaIoBaseUpload(stream, mimetype=mime_type, resumable=False)
        request = self.service.files().create(
            body={"name": name, "mimeType": mime_type},
            media_body=media,
            fields="id, name",
            supportsAllDrives=True,
        )
        result = self._execute(request, "create")

        logger.info(f"Uploaded '{result.get('name')}' as {result.get('id')}")
        return result

    def get_file(self, file_id: str, fields: str) -> Dict[str, Any]:
        """
        Fetch selected metadata fields for a file.

        Args:
            file_id: Drive file id
            fields: Drive partial-response selector, e.g. "name" or
                "webViewLink, webContentLink"

        Returns:
            Dict holding the requested fields that Drive populated

        Raises:
            DriveFileNotFoundError: If the id doesn't exist or isn't accessible
        """
        request = self.service.files().get(
            fileId=file_id,
            fields=fields,
            supportsAllDrives=True,
        )
        return self._execute(request, "get", file_id)

    def delete_file(self, file_id: str) -> int:
        """
        Permanently delete a file.

        Returns:
            HTTP status of the provider response (204)

        Raises:
            DriveFileNotFoundError: If the id doesn't exist
            DriveAccessDeniedError: If the account may not delete it
        """
        logger.info(f"Deleting Drive file {file_id}")

        request = self.service.files().delete(
            fileId=file_id,
            supportsAllDrives=True,
        )
        self._execute(request, "delete", file_id)
        return DELETE_SUCCESS_STATUS

    def grant_public_read_permission(self, file_id: str) -> Dict[str, Any]:
        """
        Make a file readable by anyone with the link.

        Drive populates webViewLink/webContentLink only after such a
        permission exists. Re-granting an existing "anyone" reader
        permission returns the same permission id.

        Returns:
            Dict with the permission `id`
        """
        logger.info(f"Granting public read permission on {file_id}")

        request = self.service.permissions().create(
            fileId=file_id,
            body=PUBLIC_READ_PERMISSION,
            fields="id",
            supportsAllDrives=True,
        )
        return self._execute(request, "grant_permission", file_id)
