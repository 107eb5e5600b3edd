"""Rack with health readings held in memory."""

from collections.abc import Mapping

from rack_monitor.models import Server
from rack_monitor.racks.base import BaseRack


class StaticRack(BaseRack):
    """Rack whose readings are supplied by the caller."""

    def __init__(
        self,
        name: str,
        server_units: Mapping[Server, int],
        health: Mapping[Server, float] | None = None,
    ) -> None:
        super().__init__(name, server_units)
        self._health: dict[Server, float] = dict(health or {})

    def update_health(self, readings: Mapping[Server, float]) -> None:
        """Replace the current readings."""
        self._health = dict(readings)

    def get_health(self) -> dict[Server, float]:
        return dict(self._health)
