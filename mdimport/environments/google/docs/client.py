"""
Google Docs API Client - Create, read and edit Google Docs.

This client is the importer's DocumentStore. New documents are created
through Drive, which converts uploaded Markdown into a native Google Doc;
reads and edits go through the Docs API.

Key Features:
=============
1. Create a document from Markdown (Drive conversion)
2. Append plain text to an existing document
3. Fetch the structural document model by ID
4. Apply edit scripts as one atomic batchUpdate
5. Parse Google Doc URLs and validate tokens

API Reference:
==============
- Documents API: https://developers.google.com/docs/api/reference/rest/v1/documents
- batchUpdate: https://developers.google.com/docs/api/reference/rest/v1/documents/batchUpdate

Usage Example:
==============
    from mdimport.environments.google.docs import GoogleDocsClient

    client = GoogleDocsClient(access_token="ya29.xxx")

    doc_id = await client.create_or_get_document("# Notes\\n", title="Notes")
    doc = await client.get_document(doc_id)
    print(doc.get_plain_text())
"""

import logging
import re
from typing import List, Optional

import httpx

from mdimport.core.config import settings
from mdimport.environments.base import APIError, DocumentStore
from mdimport.environments.google.base_client import GoogleServiceClient
from mdimport.environments.google.docs.schemas import DocumentCreated, GoogleDoc
from mdimport.environments.google.drive.client import GoogleDriveClient


logger = logging.getLogger("mdimport.environments.google.docs")


# ---------------------------------------------------------------------------
# ERROR MESSAGES
# ---------------------------------------------------------------------------
ERROR_NOT_FOUND = "I couldn't find that document. Please check the URL."
ERROR_INVALID_URL = "That doesn't look like a valid Google Doc URL."

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"
MARKDOWN_MIME_TYPE = "text/markdown"


def docs_web_view_link(document_id: str) -> str:
    """Browser link for a document ID ("" for a blank ID)."""
    document_id = (document_id or "").strip()
    if not document_id:
        return ""
    return f"https://docs.google.com/document/d/{document_id}/edit"


class GoogleDocsClient(GoogleServiceClient, DocumentStore):
    """
    Google Docs API client.

    Requires a valid access token with documents and drive.file scopes.

    Attributes:
        access_token: Google OAuth access token
        drive: Drive client used to create documents from Markdown

    Example:
        client = GoogleDocsClient(access_token="ya29.xxx")
        doc = await client.get_document("1abc123...")
    """

    service_name = "docs"
    required_scopes = [
        "https://www.googleapis.com/auth/documents",
        "https://www.googleapis.com/auth/drive.file",
    ]

    NOT_FOUND_MESSAGE = ERROR_NOT_FOUND

    # Matches: https://docs.google.com/document/d/{docId}/edit
    DOC_URL_PATTERN = re.compile(
        r"(?:https?://)?docs\.google\.com/document/d/([a-zA-Z0-9_-]+)"
    )

    # Also matches: https://docs.google.com/open?id={docId}
    DOC_OPEN_PATTERN = re.compile(
        r"(?:https?://)?docs\.google\.com/open\?id=([a-zA-Z0-9_-]+)"
    )

    def __init__(
        self,
        access_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        drive: Optional[GoogleDriveClient] = None,
    ):
        super().__init__(access_token, transport=transport, timeout=timeout)
        self.drive = drive or GoogleDriveClient(access_token, transport=transport, timeout=timeout)

    @property
    def base_url(self) -> str:
        return settings.DOCS_API_BASE_URL

    # -------------------------------------------------------------------------
    # DOCUMENT OPERATIONS
    # -------------------------------------------------------------------------

    async def create_document_from_markdown(
        self,
        markdown: str,
        title: str,
        parent_id: Optional[str] = None,
    ) -> DocumentCreated:
        """
        Create a Google Doc by uploading Markdown for Drive to convert.

        Args:
            markdown: Markdown source (images already replaced by placeholders)
            title: Document title
            parent_id: Destination folder ID

        Returns:
            DocumentCreated with id, name, mime type and link
        """
        logger.info(f"Creating document from markdown: {title}")

        drive_file = await self.drive.upload_file(
            markdown.encode("utf-8"),
            MARKDOWN_MIME_TYPE,
            title,
            target_mime_type=GOOGLE_DOC_MIME_TYPE,
            parent_id=parent_id,
            fields="id, name, mimeType, webViewLink",
        )
        created = DocumentCreated(
            id=drive_file.id,
            name=drive_file.name or title,
            mime_type=drive_file.mime_type,
            web_view_link=drive_file.web_view_link,
        )
        logger.info(f"Created document: {created.id}")
        return created

    async def get_document(self, document_id: str) -> GoogleDoc:
        """
        Fetch a Google Doc by its ID.

        Raises:
            APIError: If document not found or access denied
        """
        logger.info(f"Fetching document: {document_id[:10]}...")

        data = await self._make_request("GET", f"{self.base_url}/documents/{document_id}")

        doc = GoogleDoc.model_validate(data)
        logger.info(f"Fetched document: {doc.title}")

        return doc

    async def batch_update(self, document_id: str, requests: List[dict]) -> dict:
        """
        Send a documents.batchUpdate; Docs applies all requests or none.

        Returns:
            Raw batchUpdate response
        """
        logger.info(
            "Applying batch update",
            extra={"document_id": document_id, "request_count": len(requests)},
        )
        return await self._make_request(
            "POST",
            f"{self.base_url}/documents/{document_id}:batchUpdate",
            json_body={"requests": requests},
        )

    async def append_text(self, document_id: str, text: str) -> None:
        """Insert plain text at the end of the document body."""
        if not text:
            return
        await self.batch_update(
            document_id,
            [{"insertText": {"text": text, "endOfSegmentLocation": {}}}],
        )

    # -------------------------------------------------------------------------
    # DOCUMENT STORE
    # -------------------------------------------------------------------------

    async def create_or_get_document(
        self,
        initial_text: str,
        title: str,
        parent_id: Optional[str] = None,
        document_id: Optional[str] = None,
    ) -> str:
        if document_id:
            await self.append_text(document_id, initial_text)
            return document_id

        created = await self.create_document_from_markdown(initial_text, title, parent_id)
        return created.id

    async def batch_apply(self, document_id: str, operations: list) -> None:
        if not operations:
            return
        await self.batch_update(document_id, [operation.to_request() for operation in operations])

    # -------------------------------------------------------------------------
    # URL VALIDATION
    # -------------------------------------------------------------------------

    @classmethod
    def extract_doc_id(cls, url: str) -> str:
        """
        Extract document ID from a Google Doc URL or raw ID.

        Supports:
        - https://docs.google.com/document/d/{docId}/edit
        - https://docs.google.com/open?id={docId}
        - a bare ID of 20+ URL-safe characters

        Raises:
            APIError: If URL is invalid
        """
        if not url:
            raise APIError(ERROR_INVALID_URL, status_code=400)

        match = cls.DOC_URL_PATTERN.search(url)
        if match:
            return match.group(1)

        match = cls.DOC_OPEN_PATTERN.search(url)
        if match:
            return match.group(1)

        if re.match(r"^[a-zA-Z0-9_-]{20,}$", url.strip()):
            return url.strip()

        raise APIError(ERROR_INVALID_URL, status_code=400)

    # -------------------------------------------------------------------------
    # ACCESS VALIDATION
    # -------------------------------------------------------------------------

    async def validate_access(self, access_token: str) -> bool:
        """
        Verify the access token is valid for document operations.

        A 404 for a made-up document ID means the token itself works.
        """
        async with self._client() as client:
            try:
                response = await client.get(
                    f"{self.base_url}/documents/invalid-doc-id-for-validation",
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                    timeout=10.0,
                )
            except httpx.RequestError:
                return False
        return response.status_code in (404, 200)
