"""
Response schemas for API endpoints.
"""
from pydantic import BaseModel
from typing import Any, Optional


class UploadResponse(BaseModel):
    """Response schema for a completed upload"""
    success: bool = True
    id: str
    name: str


class DeleteResponse(BaseModel):
    """Response schema for a completed delete"""
    success: bool = True
    status: int


class ShareResponse(BaseModel):
    """Response schema for share: Drive's link fields passed through as-is"""
    webViewLink: Optional[str] = None
    webContentLink: Optional[str] = None


class DownloadLinkResponse(BaseModel):
    """Response schema for generated download link"""
    webContentLink: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for health check"""
    status: str
    environment: str


class ErrorResponse(BaseModel):
    """Body of every failed request"""
    success: bool = False
    error: Any
