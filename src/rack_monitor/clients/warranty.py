"""HTTP warranty lookup client."""

import logging

import httpx

from rack_monitor.clients.base import BaseWarrantyClient
from rack_monitor.errors import WarrantyNotFoundError, WarrantyServiceError
from rack_monitor.models import Server, Warranty

logger = logging.getLogger(__name__)


class HttpWarrantyClient(BaseWarrantyClient):
    """Look up warranties via the warranty service REST API."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        headers: dict | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize warranty client.

        Args:
            url: Base URL of the warranty service.
            timeout: Request timeout in seconds.
            headers: Optional headers to include.
            client: Optional preconfigured HTTP client.
        """
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client or httpx.Client(timeout=timeout)

    def get_warranty_for_server(self, server: Server) -> Warranty:
        """Fetch a server's warranty record."""
        url = f"{self.url}/servers/{server.server_id}/warranty"

        try:
            response = self._client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise WarrantyServiceError(f"Warranty lookup for {server} failed: {e}") from e

        if response.status_code == 404:
            logger.info(f"No warranty on file for {server}")
            raise WarrantyNotFoundError(f"No warranty found for {server}")

        if response.status_code != 200:
            raise WarrantyServiceError(
                f"Warranty service returned {response.status_code} for {server}"
            )

        try:
            payload = response.json()
            if not isinstance(payload, dict):
                raise ValueError(f"expected an object, got {type(payload).__name__}")
            return Warranty.from_dict(payload)
        except (TypeError, ValueError) as e:
            raise WarrantyServiceError(f"Malformed warranty record for {server}: {e}") from e
