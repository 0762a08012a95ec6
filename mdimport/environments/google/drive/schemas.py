"""
Google Drive Schemas - Data structures for Drive file operations.

Reference: https://developers.google.com/drive/api/reference/rest/v3/files
"""

from typing import Optional
from pydantic import BaseModel, Field


class DriveFile(BaseModel):
    """
    A Drive file as returned with a partial `fields` selection.
    """
    id: str = Field(..., description="Drive file ID")
    name: Optional[str] = None
    mime_type: Optional[str] = Field(None, alias="mimeType")
    web_content_link: Optional[str] = Field(None, alias="webContentLink")
    web_view_link: Optional[str] = Field(None, alias="webViewLink")

    class Config:
        populate_by_name = True


class DrivePermission(BaseModel):
    """Permission grant on a Drive file."""
    type: str = "anyone"
    role: str = "reader"
    id: Optional[str] = None

    class Config:
        populate_by_name = True
