"""Data models for rack health monitoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rack_monitor.errors import RackMonitorError
    from rack_monitor.racks.base import BaseRack


class HealthStatus(str, Enum):
    """Health bands a server score can fall into."""

    HEALTHY = "healthy"
    SHAKY = "shaky"
    UNHEALTHY = "unhealthy"


class RequestAction(str, Enum):
    """Remediation attached to an incident."""

    INSPECT = "inspect"
    REPLACE = "replace"


@dataclass(frozen=True)
class Server:
    """One physical unit, identified by its asset id."""

    server_id: str

    def __str__(self) -> str:
        return self.server_id


@dataclass(frozen=True)
class Warranty:
    """Warranty coverage for a server.

    A record with no ``warranty_id`` is the "no warranty" placeholder used
    when the warranty service has nothing on file for a server.
    """

    warranty_id: str | None = None
    server_id: str | None = None
    provider: str | None = None
    expires: date | None = None

    @property
    def covered(self) -> bool:
        return self.warranty_id is not None

    @classmethod
    def no_warranty(cls) -> Warranty:
        """Get the shared "no warranty" placeholder."""
        return NO_WARRANTY

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Warranty:
        """Create from a warranty service response."""
        expires = data.get("expires")
        if isinstance(expires, str):
            expires = date.fromisoformat(expires)
        return cls(
            warranty_id=data.get("warranty_id"),
            server_id=data.get("server_id"),
            provider=data.get("provider"),
            expires=expires,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "warranty_id": self.warranty_id,
            "server_id": self.server_id,
            "provider": self.provider,
            "expires": self.expires.isoformat() if self.expires else None,
        }


NO_WARRANTY = Warranty()


@dataclass(frozen=True)
class HealthIncident:
    """A recommendation to act on one server."""

    server: Server
    rack: BaseRack
    unit: int
    action: RequestAction

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "server": self.server.server_id,
            "rack": self.rack.name,
            "unit": self.unit,
            "action": self.action.value,
        }


@dataclass
class PassResult:
    """Outcome of one monitoring pass.

    ``incidents`` holds everything recorded before the pass finished or
    stopped. ``error`` is set when the pass stopped on a fatal condition.
    """

    incidents: frozenset[HealthIncident] = frozenset()
    error: RackMonitorError | None = None
    racks_checked: int = 0
    servers_checked: int = 0
    replacements_requested: int = 0
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def inspect_count(self) -> int:
        return sum(1 for i in self.incidents if i.action == RequestAction.INSPECT)

    @property
    def replace_count(self) -> int:
        return sum(1 for i in self.incidents if i.action == RequestAction.REPLACE)

    def raise_for_error(self) -> None:
        """Raise the error that stopped the pass, if any."""
        if self.error is not None:
            raise self.error

    def merge(self, other: PassResult) -> PassResult:
        """Combine two results, keeping the later error and timestamps."""
        return PassResult(
            incidents=self.incidents | other.incidents,
            error=other.error or self.error,
            racks_checked=self.racks_checked + other.racks_checked,
            servers_checked=self.servers_checked + other.servers_checked,
            replacements_requested=self.replacements_requested + other.replacements_requested,
            started_at=min(self.started_at, other.started_at),
            finished_at=other.finished_at or self.finished_at,
        )

    def sorted_incidents(self) -> list[HealthIncident]:
        """Incidents ordered by rack name, then unit."""
        return sorted(self.incidents, key=lambda i: (i.rack.name, i.unit, i.action.value))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ok": self.ok,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "summary": {
                "racks": self.racks_checked,
                "servers": self.servers_checked,
                "inspect": self.inspect_count,
                "replace": self.replace_count,
                "replacements_requested": self.replacements_requested,
            },
            "incidents": [i.to_dict() for i in self.sorted_incidents()],
            "error": self.error.to_dict() if self.error else None,
        }
