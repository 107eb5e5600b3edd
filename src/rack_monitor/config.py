"""Configuration management for Rack Monitor."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from rack_monitor.classifier import classify
from rack_monitor.errors import ConfigurationError
from rack_monitor.models import HealthStatus


@dataclass
class Thresholds:
    """Score thresholds separating the health bands."""

    shaky: float = 0.9
    unhealthy: float = 0.8

    def validate(self) -> None:
        """Reject thresholds that leave no room for a shaky band.

        Raises:
            ConfigurationError: If a threshold is outside (0.0, 1.0] or
                ``unhealthy`` is not strictly below ``shaky``.
        """
        for name, value in (("shaky", self.shaky), ("unhealthy", self.unhealthy)):
            if not 0.0 < value <= 1.0:
                raise ConfigurationError(f"{name} threshold must be in (0.0, 1.0], got {value}")
        if self.unhealthy >= self.shaky:
            raise ConfigurationError(
                f"unhealthy threshold ({self.unhealthy}) must be below "
                f"shaky threshold ({self.shaky})"
            )

    def classify(self, score: float) -> HealthStatus:
        return classify(score, self.shaky, self.unhealthy)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Thresholds":
        """Create from dictionary."""
        try:
            return cls(
                shaky=float(data.get("shaky", 0.9)),
                unhealthy=float(data.get("unhealthy", 0.8)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Thresholds must be numbers: {e}") from e


@dataclass
class ServiceConfig:
    """HTTP endpoint of an external collaborator."""

    url: str
    timeout: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConfig":
        if "url" not in data:
            raise ConfigurationError("Service configuration requires a url")
        return cls(
            url=data["url"],
            timeout=data.get("timeout", 10.0),
            headers=data.get("headers", {}),
        )


@dataclass
class RackConfig:
    """Layout and health source of a single rack."""

    name: str
    servers: dict[str, int] = field(default_factory=dict)  # server id -> unit
    health: dict[str, float] | None = None  # static readings
    inventory_url: str | None = None

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "RackConfig":
        servers_data = data.get("servers") or {}
        if not isinstance(servers_data, dict):
            raise ConfigurationError(f"Rack {name}: servers must be a mapping of server id to unit")
        servers = {str(k): _parse_unit(name, str(k), v) for k, v in servers_data.items()}

        health = data.get("health")
        if health is not None:
            if not isinstance(health, dict):
                raise ConfigurationError(f"Rack {name}: health must be a mapping of server id to score")
            health = {str(k): _parse_score(name, str(k), v) for k, v in health.items()}

        return cls(
            name=name,
            servers=servers,
            health=health,
            inventory_url=data.get("inventory_url"),
        )


def _parse_unit(rack: str, server_id: str, value: Any) -> int:
    """Read a unit slot, rejecting anything but a whole number."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Rack {rack}: unit for {server_id} must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ConfigurationError(f"Rack {rack}: unit for {server_id} must be an integer, got {value!r}")


def _parse_score(rack: str, server_id: str, value: Any) -> float:
    """Read a health score in [0.0, 1.0]."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Rack {rack}: score for {server_id} must be a number, got {value!r}")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Rack {rack}: score for {server_id} must be a number, got {value!r}"
        ) from None
    if not 0.0 <= score <= 1.0:
        raise ConfigurationError(f"Rack {rack}: score {score} for {server_id} outside [0.0, 1.0]")
    return score


@dataclass
class Config:
    """Main configuration for Rack Monitor."""

    racks: list[RackConfig] = field(default_factory=list)
    thresholds: Thresholds = field(default_factory=Thresholds)
    warranty: ServiceConfig | None = None
    replacement: ServiceConfig | None = None
    inventory_url: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        racks = []
        for name, rack_data in data.get("racks", {}).items():
            racks.append(RackConfig.from_dict(str(name), rack_data or {}))

        thresholds = Thresholds.from_dict(data.get("thresholds", {}))
        thresholds.validate()

        config = cls(
            racks=racks,
            thresholds=thresholds,
            warranty=ServiceConfig.from_dict(data["warranty"]) if "warranty" in data else None,
            replacement=ServiceConfig.from_dict(data["replacement"]) if "replacement" in data else None,
            inventory_url=data.get("inventory_url"),
            log_level=data.get("log_level", "INFO"),
        )

        for rack in config.racks:
            if rack.health is None and config.inventory_url_for(rack) is None:
                raise ConfigurationError(
                    f"Rack {rack.name} has neither static health readings nor an inventory_url"
                )
        return config

    def inventory_url_for(self, rack: RackConfig) -> str | None:
        """Get the inventory endpoint serving a rack's readings."""
        return rack.inventory_url or self.inventory_url

    def get_rack(self, name: str) -> RackConfig | None:
        """Get rack by name."""
        for rack in self.racks:
            if rack.name == name:
                return rack
        return None

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._to_dict()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        racks_dict = {}
        for rack in self.racks:
            rack_data: dict[str, Any] = {"servers": dict(rack.servers)}
            if rack.health is not None:
                rack_data["health"] = dict(rack.health)
            if rack.inventory_url:
                rack_data["inventory_url"] = rack.inventory_url
            racks_dict[rack.name] = rack_data

        data: dict[str, Any] = {
            "racks": racks_dict,
            "thresholds": {
                "shaky": self.thresholds.shaky,
                "unhealthy": self.thresholds.unhealthy,
            },
        }
        for key, service in (("warranty", self.warranty), ("replacement", self.replacement)):
            if service:
                data[key] = {"url": service.url, "timeout": service.timeout}
                if service.headers:
                    data[key]["headers"] = dict(service.headers)
        if self.inventory_url:
            data["inventory_url"] = self.inventory_url
        data["log_level"] = self.log_level
        return data


def create_example_config() -> Config:
    """Create an example configuration for documentation."""
    return Config(
        racks=[
            RackConfig(
                name="RACK01",
                servers={"TEST0001": 1, "TEST0002": 2, "TEST0003": 3},
                health={"TEST0001": 0.97, "TEST0002": 0.85, "TEST0003": 0.5},
            ),
            RackConfig(
                name="RACK02",
                servers={"TEST0101": 1, "TEST0102": 2},
                inventory_url="http://inventory.example.internal/api",
            ),
        ],
        thresholds=Thresholds(shaky=0.9, unhealthy=0.8),
        warranty=ServiceConfig(url="http://warranty.example.internal/api"),
        replacement=ServiceConfig(url="http://replacements.example.internal/api"),
    )
