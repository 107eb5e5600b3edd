"""Exception types raised by the monitor and its collaborators."""

from typing import Any


class RackMonitorError(Exception):
    """A monitoring pass could not be completed.

    Carries the server, rack and collaborator involved when they are known,
    so callers can report which part of the fleet broke the pass.
    """

    def __init__(
        self,
        message: str,
        server: Any = None,
        rack: Any = None,
        collaborator: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.server = server
        self.rack = rack
        self.collaborator = collaborator

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "server": getattr(self.server, "server_id", None),
            "rack": getattr(self.rack, "name", None),
            "collaborator": self.collaborator,
            "cause": str(self.__cause__) if self.__cause__ else None,
        }


class ConfigurationError(RackMonitorError):
    """Invalid thresholds, rack layout or configuration file."""


class UnknownServerError(ConfigurationError):
    """A rack reported health for a server missing from its unit map."""


class ClientError(Exception):
    """Base class for failures reported by external collaborators."""


class WarrantyNotFoundError(ClientError):
    """The warranty service has no record for the server."""


class WarrantyServiceError(ClientError):
    """The warranty service failed to answer."""


class ReplacementServiceError(ClientError):
    """The replacement service rejected or failed a request."""


class RackInventoryError(ClientError):
    """A rack's health readings could not be fetched."""
