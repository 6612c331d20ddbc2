"""
Client Module - Black Box Interface

Purpose: Let peer services (e.g. a factorization service) call the stats API
Interface: StatsClient.login(), StatsClient.compute_stats()
Hidden: HTTP transport, request/response encoding

The caller forwards its own Authorization header so the stats API
authorizes the end user, not the peer service.
"""

import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from ...config.provider import ClientConfig
from ..api.models import StatsRequest, StatsResponse

logger = logging.getLogger(__name__)


class StatsClientError(Exception):
    """The stats API could not be reached or returned an unusable answer."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StatsClient:
    """Async HTTP client for the Matrixstats API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the stats API, e.g. http://localhost:3000
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: ClientConfig) -> "StatsClient":
        return cls(config.stats_api_url, timeout=config.timeout_seconds)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def login(self, username: str, password: str) -> str:
        """
        Exchange credentials for a bearer token.

        Returns:
            The token string

        Raises:
            StatsClientError: credentials rejected or API unreachable
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/login", json={"username": username, "password": password}
                )
        except httpx.HTTPError as e:
            raise StatsClientError(f"Login request failed: {e}") from e

        if response.status_code != 200:
            raise StatsClientError(
                f"Login rejected with status {response.status_code}",
                status_code=response.status_code,
            )

        token = response.json().get("token")
        if not token:
            raise StatsClientError("Login response carried no token", status_code=200)
        return token

    async def compute_stats(
        self,
        matrices: Sequence[Sequence[Sequence[Any]]],
        authorization: str,
    ) -> StatsResponse:
        """
        Send a batch of matrices to the stats API.

        Args:
            matrices: Batch to aggregate
            authorization: Authorization header to forward ("Bearer <token>")

        Returns:
            Parsed StatsResponse

        Raises:
            StatsClientError: transport failure, non-200 status or bad body
        """
        payload = StatsRequest(matrices=[list(m) for m in matrices]).model_dump()

        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/stats",
                    json=payload,
                    headers={"Authorization": authorization},
                )
        except httpx.HTTPError as e:
            logger.error(f"Stats API request failed: {e}")
            raise StatsClientError(f"Stats API request failed: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Stats API answered {response.status_code}")
            raise StatsClientError(
                f"Stats API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return StatsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise StatsClientError(f"Could not decode stats response: {e}", status_code=200) from e


__all__ = ["StatsClient", "StatsClientError"]
