"""Replacement request clients."""

import logging

import httpx

from rack_monitor.clients.base import BaseReplacementClient
from rack_monitor.errors import ReplacementServiceError
from rack_monitor.models import Warranty
from rack_monitor.racks.base import BaseRack

logger = logging.getLogger(__name__)


class HttpReplacementClient(BaseReplacementClient):
    """Submit replacement orders to the fulfillment service."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        headers: dict | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client or httpx.Client(timeout=timeout)

    def request_replacement(self, rack: BaseRack, unit: int, warranty: Warranty) -> None:
        """POST a replacement order."""
        payload = {
            "rack": rack.name,
            "unit": unit,
            "warranty": warranty.to_dict(),
        }

        try:
            response = self._client.post(
                f"{self.url}/replacements",
                json=payload,
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            raise ReplacementServiceError(
                f"Replacement request for {rack.name} unit {unit} failed: {e}"
            ) from e

        if response.status_code not in (200, 201, 202, 204):
            raise ReplacementServiceError(
                f"Replacement service returned {response.status_code} "
                f"for {rack.name} unit {unit}"
            )

        logger.info(f"Replacement requested for {rack.name} unit {unit}")


class DryRunReplacementClient(BaseReplacementClient):
    """Log replacement requests without submitting them."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, int, Warranty]] = []

    def request_replacement(self, rack: BaseRack, unit: int, warranty: Warranty) -> None:
        logger.info(f"[DRY RUN] Would request replacement for {rack.name} unit {unit}")
        self.requests.append((rack.name, unit, warranty))
