"""
Google Drive API Client - Stage files and share them publicly.

The importer uses Drive as its ObjectStore: local images are uploaded,
shared as anyone-with-the-link reader so the Docs renderer can fetch
them, and deleted again once the document holds its own copy.

API Reference:
==============
- Files API: https://developers.google.com/drive/api/reference/rest/v3/files
- Permissions API: https://developers.google.com/drive/api/reference/rest/v3/permissions

Usage Example:
==============
    from mdimport.environments.google.drive import GoogleDriveClient

    drive = GoogleDriveClient(access_token="ya29.xxx")
    uploaded = await drive.upload(png_bytes, "image/png", "chart.png")
    await drive.set_public_readable(uploaded.object_id)
"""

import logging
from typing import Optional

from mdimport.core.config import settings
from mdimport.environments.base import APIError, ObjectStore, UploadedObject
from mdimport.environments.google.base_client import GoogleServiceClient, build_multipart_related
from mdimport.environments.google.drive.schemas import DriveFile, DrivePermission


logger = logging.getLogger("mdimport.environments.google.drive")


class GoogleDriveClient(GoogleServiceClient, ObjectStore):
    """
    Google Drive API client.

    Requires an access token with the drive.file scope.

    Example:
        client = GoogleDriveClient(access_token="ya29.xxx")
        url = await client.get_public_url("1abc...")
    """

    service_name = "drive"
    required_scopes = [
        "https://www.googleapis.com/auth/drive.file",
    ]

    NOT_FOUND_MESSAGE = "File not found"

    @property
    def base_url(self) -> str:
        return settings.DRIVE_API_BASE_URL

    @property
    def upload_url(self) -> str:
        return settings.DRIVE_UPLOAD_BASE_URL

    # -------------------------------------------------------------------------
    # OBJECT STORE
    # -------------------------------------------------------------------------

    async def upload_file(
        self,
        data: bytes,
        mime_type: str,
        name: str,
        target_mime_type: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: str = "id, webContentLink",
    ) -> DriveFile:
        """
        Create a file with content in a single multipart request.

        Args:
            data: File bytes
            mime_type: MIME type of data
            name: File name in Drive
            target_mime_type: Drive MIME type to convert to (e.g. a Google Doc)
            parent_id: Destination folder ID
            fields: Partial response selector

        Returns:
            DriveFile with the requested fields
        """
        metadata = {"name": name, "mimeType": target_mime_type or mime_type}
        if parent_id:
            metadata["parents"] = [parent_id]

        body, content_type = build_multipart_related(metadata, data, mime_type)

        response = await self._make_request(
            "POST",
            f"{self.upload_url}/files",
            params={
                "uploadType": "multipart",
                "supportsAllDrives": "true",
                "fields": fields,
            },
            content=body,
            content_type=content_type,
        )
        return DriveFile.model_validate(response)

    async def upload(self, data: bytes, mime_type: str, name: str) -> UploadedObject:
        drive_file = await self.upload_file(data, mime_type, name)
        logger.info(f"Uploaded {name} to Drive: {drive_file.id}")
        return UploadedObject(object_id=drive_file.id, url=drive_file.web_content_link)

    async def set_public_readable(self, object_id: str) -> None:
        """Grant anyone-with-the-link read access."""
        permission = DrivePermission(type="anyone", role="reader")
        await self._make_request(
            "POST",
            f"{self.base_url}/files/{object_id}/permissions",
            params={"supportsAllDrives": "true"},
            json_body=permission.model_dump(exclude_none=True),
        )

    async def get_public_url(self, object_id: str) -> Optional[str]:
        response = await self._make_request(
            "GET",
            f"{self.base_url}/files/{object_id}",
            params={"fields": "webContentLink", "supportsAllDrives": "true"},
        )
        return response.get("webContentLink") or None

    async def delete(self, object_id: str) -> None:
        """Permanently delete a file (204 No Content on success)."""
        await self._make_request(
            "DELETE",
            f"{self.base_url}/files/{object_id}",
            params={"supportsAllDrives": "true"},
            expected=(200, 204),
        )

    # -------------------------------------------------------------------------
    # ACCESS VALIDATION
    # -------------------------------------------------------------------------

    async def validate_access(self, access_token: str) -> bool:
        """Check the token against the lightweight about endpoint."""
        client = GoogleDriveClient(access_token, transport=self._transport, timeout=10.0)
        try:
            await client._make_request("GET", f"{self.base_url}/about", params={"fields": "user"})
            return True
        except APIError:
            return False
