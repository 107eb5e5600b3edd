"""Base rack interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from rack_monitor.errors import ConfigurationError, UnknownServerError
from rack_monitor.models import Server


class BaseRack(ABC):
    """Abstract base class for a rack of servers.

    A rack knows which unit slot each of its servers occupies. Subclasses
    decide where the health readings come from. Racks compare by identity.
    """

    def __init__(self, name: str, server_units: Mapping[Server, int]) -> None:
        """Initialize rack.

        Args:
            name: Rack name.
            server_units: Unit slot of every installed server.

        Raises:
            ConfigurationError: If a unit is not a positive integer or is
                used by more than one server.
        """
        seen: dict[int, Server] = {}
        for server, unit in server_units.items():
            if isinstance(unit, bool) or not isinstance(unit, int) or unit < 1:
                raise ConfigurationError(
                    f"Rack {name}: unit for {server} must be a positive integer, got {unit!r}"
                )
            if unit in seen:
                raise ConfigurationError(
                    f"Rack {name}: unit {unit} assigned to both {seen[unit]} and {server}"
                )
            seen[unit] = server

        self.name = name
        self._server_units = dict(server_units)

    @property
    def servers(self) -> list[Server]:
        return list(self._server_units)

    def get_unit_for_server(self, server: Server) -> int:
        """Get the unit slot a server is installed in.

        Raises:
            UnknownServerError: If the server is not installed in this rack.
        """
        try:
            return self._server_units[server]
        except KeyError:
            raise UnknownServerError(
                f"Rack {self.name} has no unit for server {server}",
                server=server,
                rack=self,
            ) from None

    @abstractmethod
    def get_health(self) -> Mapping[Server, float]:
        """Get the current health score of each server.

        Returns:
            Mapping of server to score in [0.0, 1.0].
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, servers={len(self._server_units)})"
