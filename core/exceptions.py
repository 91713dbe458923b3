"""
Custom exceptions for the Drive Gateway application.
All exceptions inherit from base DriveGatewayException.
"""


# ============================================================================
# Base Exception
# ============================================================================

class DriveGatewayException(Exception):
    """Base exception for all application errors"""
    def __init__(self, message: str, detail: dict = None):
        self.message = message
        self.detail = detail or {}
        super().__init__(self.message)


# ============================================================================
# Google Drive Exceptions
# ============================================================================

class DriveException(DriveGatewayException):
    """Base exception for Google Drive errors"""


class DriveFileNotFoundError(DriveException):
    """File id doesn't exist or isn't visible to the authenticated account"""


class DriveAccessDeniedError(DriveException):
    """Drive refused the operation (permissions, quota, rate limit)"""


class DriveAuthError(DriveException):
    """OAuth refresh token was rejected or could not be exchanged"""


class DriveRequestError(DriveException):
    """Any other Drive API or transport failure"""


# ============================================================================
# Upload Exceptions
# ============================================================================

class UploadException(DriveGatewayException):
    """Base exception for upload request errors"""


class NoFileUploadedError(UploadException):
    """Multipart request carried no file"""


class FileTooLargeError(UploadException):
    """Uploaded file exceeds the configured size limit"""


class TempFileError(UploadException):
    """Failed to spool or remove the local temporary upload file"""
