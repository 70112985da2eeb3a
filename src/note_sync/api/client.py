"""Notes server API client using httpx.

Provides bearer-authenticated access to the notes server
with uniform error handling.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from note_sync.config import DEFAULT_TIMEOUT, get_api_base
from note_sync.models import ErrorCode, NoteSyncError

logger = logging.getLogger(__name__)

USER_AGENT = "note-sync/0.1.0"


class NoteSyncClient:
    """HTTP client for the notes server.

    Every failure (non-success status, network error, undecodable body)
    is raised as NoteSyncError. Use as async context manager for proper
    resource management.

    Attributes:
        api_base: Server base URL
        token: Bearer token sent with each request (optional for auth endpoints)
    """

    def __init__(
        self,
        api_base: str | None = None,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            api_base: Server base URL (default: NOTE_SYNC_API_BASE)
            token: Bearer token for authentication
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.api_base = (api_base or get_api_base()).rstrip("/")
        self.token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            base_url=self.api_base,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, has_body: bool = False) -> dict[str, str]:
        """Build request headers with authentication.

        Args:
            has_body: Whether the request carries a JSON body

        Returns:
            Headers dictionary with Accept and Authorization if a token exists
        """
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Raise for a non-success response.

        All statuses are reported the same way: the numeric status,
        the reason phrase and the raw body text in one message.

        Args:
            response: HTTP response object

        Raises:
            NoteSyncError: Always, with code HTTP_ERROR
        """
        status = response.status_code
        text = response.text
        raise NoteSyncError(
            code=ErrorCode.HTTP_ERROR,
            message=f"{status} {response.reason_phrase} - {text}",
            details={"status_code": status, "response": text},
        )

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request to the API.

        Args:
            method: HTTP method
            path: API endpoint path (e.g., "/notes")
            json: JSON body

        Returns:
            Decoded JSON body, or None for a response without content

        Raises:
            NoteSyncError: If request fails
        """
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        headers = self._build_headers(has_body=json is not None)
        logger.debug("%s %s", method, path)

        try:
            response = await self._client.request(method, path, headers=headers, json=json)
        except httpx.InvalidURL as e:
            raise NoteSyncError(
                code=ErrorCode.NETWORK_ERROR,
                message=f"Invalid request URL: {e}",
                details={"method": method, "path": path},
            ) from e
        except httpx.HTTPError as e:
            raise NoteSyncError(
                code=ErrorCode.NETWORK_ERROR,
                message=f"Request failed: {e}",
                details={"method": method, "path": path},
            ) from e

        if not response.is_success:
            self._handle_error_response(response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise NoteSyncError(
                code=ErrorCode.INVALID_RESPONSE,
                message=f"Invalid JSON in response to {method} {path}",
                details={"status_code": response.status_code, "response": response.text},
            ) from e

    async def get(self, path: str) -> Any:
        """Make a GET request to the API."""
        return await self.request("GET", path)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Make a POST request to the API."""
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Make a PATCH request to the API."""
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        """Make a DELETE request to the API."""
        return await self.request("DELETE", path)
