"""API client for the Focus Companion backend."""

import logging
from typing import Any, Optional

import httpx

from focus_companion.api.errors import APIError, MissingCredentialsError
from focus_companion.config import get_config_manager

logger = logging.getLogger(__name__)


class APIClient:
    """HTTP client for the Focus Companion API.

    Requests are sent once. Failures surface to the caller as
    :class:`APIError`, :class:`MissingCredentialsError` or
    ``httpx.RequestError``; retrying is left to the user.
    """

    def __init__(self, profile: str = "default"):
        self.config_manager = get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = self.config_manager.api_endpoint.rstrip("/")
        self.timeout = self.config.api.timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers, including the bearer token unless skipped."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if not skip_auth:
            token = self.config_manager.get_token()
            if not token:
                raise MissingCredentialsError()
            headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the API."""
        headers = self._get_headers(skip_auth=skip_auth)
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        logger.debug("%s %s%s", method, self.base_url, url)
        response = await client.request(
            method=method,
            url=url,
            json=json,
            headers=headers,
        )
        if response.is_error:
            error = APIError.from_response(response)
            logger.warning("%s %s failed: %s", method, url, error)
            raise error
        return response

    async def get(self, path: str) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path)

    async def post(
        self, path: str, *, json: Optional[dict[str, Any]] = None, skip_auth: bool = False
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json, skip_auth=skip_auth)

    async def put(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)