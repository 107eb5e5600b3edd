"""Base collaborator interfaces."""

from abc import ABC, abstractmethod

from rack_monitor.models import Server, Warranty
from rack_monitor.racks.base import BaseRack


class BaseWarrantyClient(ABC):
    """Abstract base class for warranty lookups."""

    @abstractmethod
    def get_warranty_for_server(self, server: Server) -> Warranty:
        """Look up a server's warranty.

        Args:
            server: Server to look up.

        Returns:
            Warranty on file, or ``Warranty.no_warranty()``.

        Raises:
            WarrantyNotFoundError: If the service has no record for the server.
            WarrantyServiceError: If the service failed to answer.
        """
        ...


class BaseReplacementClient(ABC):
    """Abstract base class for replacement requests."""

    @abstractmethod
    def request_replacement(self, rack: BaseRack, unit: int, warranty: Warranty) -> None:
        """Order a replacement for the server in a rack unit.

        Args:
            rack: Rack holding the server.
            unit: Unit slot of the server.
            warranty: Warranty backing the replacement, possibly the
                "no warranty" placeholder.

        Raises:
            ReplacementServiceError: If the request was not accepted.
        """
        ...
