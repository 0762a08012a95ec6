"""
Google API Client Base - Authenticated HTTP plumbing shared by Docs and Drive.

Handles:
- Bearer token headers
- Mapping 401/403/404/other status codes to APIError with readable messages
- Network failures (httpx.RequestError) as APIError
- multipart/related bodies for Drive media uploads
"""

import json
import logging
import uuid
from typing import Any, Dict, Iterable, Optional, Tuple

import httpx

from mdimport.core.config import settings
from mdimport.environments.base import APIError, EnvironmentService


logger = logging.getLogger("mdimport.environments.google")


ERROR_UNAUTHORIZED = "Unauthorized - access token may be expired"
ERROR_MISSING_SCOPE = "Please reconnect Google to allow document and file access."


def build_multipart_related(
    metadata: Dict[str, Any],
    data: bytes,
    mime_type: str,
) -> Tuple[bytes, str]:
    """
    Build a multipart/related body (JSON metadata part + media part).

    Returns:
        (body, content_type) ready to POST with uploadType=multipart
    """
    boundary = f"mdimport-{uuid.uuid4().hex}"
    head = (
        f"--{boundary}\r\n"
        "Content-Type: application/json; charset=UTF-8\r\n\r\n"
        f"{json.dumps(metadata)}\r\n"
        f"--{boundary}\r\n"
        f"Content-Type: {mime_type}\r\n\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("utf-8")
    return head + data + tail, f"multipart/related; boundary={boundary}"


class GoogleServiceClient(EnvironmentService):
    """
    Base for Google REST clients.

    Subclasses set service_name, required_scopes and NOT_FOUND_MESSAGE.
    """

    NOT_FOUND_MESSAGE = "Resource not found"

    def __init__(
        self,
        access_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            access_token: Valid Google OAuth access token
            transport: Optional httpx transport (tests pass httpx.MockTransport)
            timeout: Request timeout in seconds (defaults to settings)
        """
        self.access_token = access_token
        self._transport = transport
        self.timeout = timeout if timeout is not None else settings.API_REQUEST_TIMEOUT

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json_body: Optional[dict] = None,
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
        expected: Iterable[int] = (200,),
    ) -> dict:
        """
        Make an authenticated request to a Google API.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            url: Absolute request URL
            params: Query parameters
            json_body: JSON body to send
            content: Raw body to send (uploads)
            content_type: Content-Type for a raw body
            expected: Status codes treated as success

        Returns:
            Parsed JSON response ({} for empty bodies)

        Raises:
            APIError: If the request fails with user-friendly message
        """
        label = self.service_name.capitalize()
        headers = self._get_headers()
        if content_type:
            headers["Content-Type"] = content_type

        async with self._client() as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    json=json_body,
                    content=content,
                    timeout=self.timeout,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in {label} API: {e}")
                raise APIError(f"Network error: {e}")

        if response.status_code == 401:
            logger.error(f"{label} API: Unauthorized (token may be expired)")
            raise APIError(
                ERROR_UNAUTHORIZED,
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error(f"{label} API: Forbidden (no permission or scope)")
            error_text = response.text.lower()
            if "scope" in error_text or "insufficient" in error_text:
                raise APIError(
                    ERROR_MISSING_SCOPE,
                    status_code=403,
                    response=response.text,
                )
            raise APIError(
                f"Forbidden: {response.text}",
                status_code=403,
                response=response.text,
            )

        if response.status_code == 404:
            logger.error(f"{label} API: Not found ({url})")
            raise APIError(
                self.NOT_FOUND_MESSAGE,
                status_code=404,
                response=response.text,
            )

        if response.status_code not in tuple(expected):
            error_detail = response.text
            logger.error(f"{label} API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        if not response.content:
            return {}
        return response.json()
