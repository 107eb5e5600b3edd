"""Rack whose health readings come from the inventory service."""

import logging
from collections.abc import Mapping

import httpx

from rack_monitor.errors import RackInventoryError
from rack_monitor.models import Server
from rack_monitor.racks.base import BaseRack

logger = logging.getLogger(__name__)


class InventoryRack(BaseRack):
    """Fetch per-server health scores over HTTP.

    Expects ``GET {inventory_url}/racks/{name}/health`` to answer with
    ``{"servers": {"<server id>": <score>, ...}}``.
    """

    def __init__(
        self,
        name: str,
        server_units: Mapping[Server, int],
        inventory_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize inventory-backed rack.

        Args:
            name: Rack name.
            server_units: Unit slot of every installed server.
            inventory_url: Base URL of the inventory service.
            timeout: Request timeout in seconds.
            client: Optional preconfigured HTTP client.
        """
        super().__init__(name, server_units)
        self.inventory_url = inventory_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def get_health(self) -> dict[Server, float]:
        """Fetch the rack's current readings.

        Raises:
            RackInventoryError: If the service fails or returns a malformed
                or out-of-range reading.
        """
        url = f"{self.inventory_url}/racks/{self.name}/health"
        logger.debug(f"Fetching health readings from {url}")

        try:
            response = self._client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise RackInventoryError(
                f"Inventory service returned {e.response.status_code} for rack {self.name}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise RackInventoryError(f"Failed to fetch health for rack {self.name}: {e}") from e

        servers = payload.get("servers") if isinstance(payload, dict) else None
        if not isinstance(servers, dict):
            raise RackInventoryError(
                f"Rack {self.name}: malformed health response, expected a 'servers' mapping"
            )

        readings: dict[Server, float] = {}
        for server_id, score in servers.items():
            try:
                score = float(score)
            except (TypeError, ValueError):
                raise RackInventoryError(
                    f"Rack {self.name}: non-numeric score {score!r} for {server_id}"
                ) from None
            if not 0.0 <= score <= 1.0:
                raise RackInventoryError(
                    f"Rack {self.name}: score {score} for {server_id} outside [0.0, 1.0]"
                )
            readings[Server(server_id)] = score

        return readings
