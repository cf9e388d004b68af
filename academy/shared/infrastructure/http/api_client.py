"""HTTP transport for the course API.

Wraps a single ``httpx.AsyncClient``. Every authenticated call reads the
token from the injected credential provider at call time; a missing token
fails before any request is built.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from academy.shared.core.errors import (
    NetworkUnavailable,
    Operation,
    RequestFailed,
    Unauthenticated,
)
from academy.shared.infrastructure.persistence.token_storage import CredentialProvider

logger = logging.getLogger(__name__)


class ApiClient:
    """Bearer-authenticated JSON client shared by all resource clients."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self, operation: Operation, token: Optional[str]) -> Dict[str, str]:
        token = token or self.credentials.get_token()
        if not token:
            logger.debug(f"{operation.value}: no token, request not sent")
            raise Unauthenticated()
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        operation: Operation,
        method: str,
        path: str,
        *,
        auth: bool = True,
        json: Any = None,
        files: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        Args:
            operation: Operation the call belongs to, used for error typing
            method: HTTP method
            path: Path relative to the API base URL
            auth: Attach the bearer token (required) when True
            json: JSON body
            files: Multipart files, mutually exclusive with ``json``
            token: Explicit token overriding the provider, used by logout

        Returns:
            Decoded JSON, or None for empty bodies

        Raises:
            Unauthenticated: Token missing, or the server answered 401
            RequestFailed: Any other non-2xx answer or an undecodable body
            NetworkUnavailable: Transport failure
        """
        headers = self._auth_headers(operation, token) if auth else {}

        logger.debug(f"{operation.value}: {method} {path}")
        try:
            response = await self._client.request(
                method,
                path,
                headers=headers,
                json=json,
                files=files,
            )
        except httpx.TransportError as e:
            logger.warning(f"{operation.value}: transport failure: {e}")
            raise NetworkUnavailable(operation, str(e)) from e

        if response.status_code == 401:
            raise Unauthenticated(self._server_message(response) or "Not authenticated")

        if not response.is_success:
            message = self._server_message(response)
            logger.info(f"{operation.value}: HTTP {response.status_code} ({message or 'no message'})")
            raise RequestFailed(operation, message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RequestFailed(operation, "Malformed response from server", response.status_code) from e

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        """Pull a ``message`` out of an error body when the server sent one."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None
