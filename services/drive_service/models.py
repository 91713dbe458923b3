"""
Drive file model.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DriveFile(BaseModel):
    """
    Metadata of a Drive file as returned by a partial-response request.

    Only the fields that were requested are populated. Drive remains the
    source of truth; instances live for one request.

    Attributes:
        id: Drive-assigned file id
        name: Display name
        mime_type: Content type
        web_view_link: Browser view link, set once a public permission exists
        web_content_link: Direct download link, set once a public permission exists
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    mime_type: Optional[str] = Field(None, alias="mimeType")
    web_view_link: Optional[str] = Field(None, alias="webViewLink")
    web_content_link: Optional[str] = Field(None, alias="webContentLink")
