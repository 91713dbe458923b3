"""In-memory stand-in for DriveClient."""
from itertools import count
from typing import Dict, List, Optional

from core.exceptions import DriveFileNotFoundError, DriveException

GOOGLE_APPS_MIME_PREFIX = "application/vnd.google-apps."


class FakeDriveClient:
    """
    Mimics DriveClient's four operations against a dict of files.

    `failures` maps an operation name ("create", "get", "delete",
    "grant_permission") to an exception raised on the next call.
    Every call is appended to `calls` as (operation, file_id).
    """

    def __init__(self):
        self.files: Dict[str, dict] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, DriveException] = {}
        self.uploaded_content: Dict[str, bytes] = {}
        self._ids = count(1)

    def add_file(self, name: str, mime_type: str = "text/plain", file_id: Optional[str] = None) -> str:
        file_id = file_id or f"fake-id-{next(self._ids)}"
        self.files[file_id] = {"id": file_id, "name": name, "mimeType": mime_type, "public": False}
        return file_id

    def _maybe_fail(self, operation: str):
        if operation in self.failures:
            raise self.failures.pop(operation)

    def _require(self, file_id: str) -> dict:
        if file_id not in self.files:
            raise DriveFileNotFoundError(
                message=f"Drive file not found: {file_id}",
                detail={"file_id": file_id, "error": {"code": 404, "message": f"File not found: {file_id}."}}
            )
        return self.files[file_id]

    def create_file(self, stream, name, mime_type):
        self.calls.append(("create", None))
        self._maybe_fail("create")
        file_id = self.add_file(name, mime_type)
        self.uploaded_content[file_id] = stream.read()
        return {"id": file_id, "name": name}

    def get_file(self, file_id, fields):
        self.calls.append(("get", file_id))
        self._maybe_fail("get")
        record = self._require(file_id)
        view = {
            "id": record["id"],
            "name": record["name"],
            "mimeType": record["mimeType"],
        }
        if record["public"]:
            view["webViewLink"] = f"https://drive.google.com/file/d/{file_id}/view?usp=drivesdk"
            # native Google Docs/Sheets have no direct download link
            if not record["mimeType"].startswith(GOOGLE_APPS_MIME_PREFIX):
                view["webContentLink"] = f"https://drive.google.com/uc?id={file_id}&export=download"
        wanted = [field.strip() for field in fields.split(",")]
        return {key: value for key, value in view.items() if key in wanted}

    def delete_file(self, file_id):
        self.calls.append(("delete", file_id))
        self._maybe_fail("delete")
        self._require(file_id)
        del self.files[file_id]
        return 204

    def grant_public_read_permission(self, file_id):
        self.calls.append(("grant_permission", file_id))
        self._maybe_fail("grant_permission")
        self._require(file_id)["public"] = True
        return {"id": "anyoneWithLink"}
