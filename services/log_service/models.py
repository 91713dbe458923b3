"""
Operation log record model.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict


class OperationType(str, Enum):
    UPLOAD = "upload"
    DELETE = "delete"
    PUBLIC_URL = "public_URL"
    DOWNLOAD_URL = "download_URL"


class OperationLogEntry(BaseModel):
    """
    One completed gateway operation.

    Attributes:
        operation_type: Which handler completed
        filename: Drive display name of the file ("Unknown" if Drive had none)
        file_id: Drive file id
        url: Link handed out by share/download, empty for upload/delete
    """
    model_config = ConfigDict(frozen=True)

    operation_type: OperationType
    filename: str
    file_id: str
    url: str = ""
