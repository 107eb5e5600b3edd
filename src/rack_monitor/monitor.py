"""Core rack monitoring logic."""

import logging
from collections.abc import Iterable
from datetime import datetime

from rack_monitor.clients import (
    BaseReplacementClient,
    BaseWarrantyClient,
    DryRunReplacementClient,
    HttpReplacementClient,
    HttpWarrantyClient,
)
from rack_monitor.config import Config, RackConfig, Thresholds
from rack_monitor.errors import (
    ClientError,
    ConfigurationError,
    RackMonitorError,
    WarrantyNotFoundError,
)
from rack_monitor.models import (
    HealthIncident,
    HealthStatus,
    PassResult,
    RequestAction,
    Server,
    Warranty,
)
from rack_monitor.racks import BaseRack, InventoryRack, StaticRack

logger = logging.getLogger(__name__)


class RackMonitor:
    """Main rack monitoring orchestrator."""

    def __init__(
        self,
        racks: Iterable[BaseRack],
        warranty_client: BaseWarrantyClient,
        replacement_client: BaseReplacementClient,
        shaky_threshold: float = 0.9,
        unhealthy_threshold: float = 0.8,
    ) -> None:
        """Initialize rack monitor.

        Args:
            racks: Racks to watch.
            warranty_client: Warranty lookup service.
            replacement_client: Replacement request service.
            shaky_threshold: Scores below this are at least shaky.
            unhealthy_threshold: Scores below this are unhealthy.

        Raises:
            ConfigurationError: If the thresholds are out of range or inverted.
        """
        self.thresholds = Thresholds(shaky=shaky_threshold, unhealthy=unhealthy_threshold)
        self.thresholds.validate()

        self.racks = list(racks)
        self.warranty_client = warranty_client
        self.replacement_client = replacement_client
        self._incidents: frozenset[HealthIncident] = frozenset()
        self._last_result: PassResult | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        warranty_client: BaseWarrantyClient | None = None,
        replacement_client: BaseReplacementClient | None = None,
        dry_run: bool = False,
    ) -> "RackMonitor":
        """Build a monitor from configuration.

        Clients not passed in are created from the configured endpoints.
        With ``dry_run`` replacement requests are only logged.
        """
        if warranty_client is None:
            if config.warranty is None:
                raise ConfigurationError("No warranty service configured")
            warranty_client = HttpWarrantyClient(
                config.warranty.url,
                timeout=config.warranty.timeout,
                headers=config.warranty.headers,
            )

        if replacement_client is None:
            if dry_run:
                replacement_client = DryRunReplacementClient()
            elif config.replacement is None:
                raise ConfigurationError("No replacement service configured")
            else:
                replacement_client = HttpReplacementClient(
                    config.replacement.url,
                    timeout=config.replacement.timeout,
                    headers=config.replacement.headers,
                )

        racks = [build_rack(rack, config.inventory_url_for(rack)) for rack in config.racks]

        return cls(
            racks,
            warranty_client,
            replacement_client,
            shaky_threshold=config.thresholds.shaky,
            unhealthy_threshold=config.thresholds.unhealthy,
        )

    def run_pass(self) -> PassResult:
        """Inspect every rack once.

        Does not touch the accumulated incidents. A fatal condition stops the
        pass; the result then carries the error along with the incidents
        recorded before it.

        Returns:
            PassResult for this pass.
        """
        result = PassResult(started_at=datetime.now())
        incidents: set[HealthIncident] = set()

        logger.info(f"Starting monitoring pass over {len(self.racks)} rack(s)")

        try:
            for rack in sorted(self.racks, key=lambda r: r.name):
                self._check_rack(rack, incidents, result)
                result.racks_checked += 1
        except RackMonitorError as e:
            logger.error(f"Monitoring pass aborted: {e}")
            result.error = e

        result.incidents = frozenset(incidents)
        result.finished_at = datetime.now()

        if result.ok:
            logger.info(
                f"Monitoring pass complete: {result.servers_checked} servers, "
                f"{result.inspect_count} inspect, {result.replace_count} replace"
            )
        return result

    def monitor_racks(self) -> PassResult:
        """Run a pass and add its incidents to the accumulated set.

        Incidents recorded before a failure are kept.

        Raises:
            RackMonitorError: If the pass stopped on a fatal condition.
        """
        result = self.run_pass()
        self._incidents = self._incidents | result.incidents
        self._last_result = result
        result.raise_for_error()
        return result

    def get_incidents(self) -> frozenset[HealthIncident]:
        """Get incidents accumulated across passes."""
        return self._incidents

    def clear_incidents(self) -> None:
        """Forget all accumulated incidents."""
        self._incidents = frozenset()

    def get_last_result(self) -> PassResult | None:
        """Get the result of the last monitor_racks() call."""
        return self._last_result

    def _check_rack(
        self,
        rack: BaseRack,
        incidents: set[HealthIncident],
        result: PassResult,
    ) -> None:
        logger.info(f"Checking rack: {rack.name}")

        try:
            health = rack.get_health()
        except ClientError as e:
            raise RackMonitorError(
                f"Could not read health of rack {rack.name}: {e}",
                rack=rack,
                collaborator="inventory",
            ) from e

        for server, score in health.items():
            unit = rack.get_unit_for_server(server)
            result.servers_checked += 1
            status = self.thresholds.classify(score)

            if status == HealthStatus.SHAKY:
                logger.warning(f"{server} in {rack.name} unit {unit} is shaky ({score:.2f})")
                incidents.add(HealthIncident(server, rack, unit, RequestAction.INSPECT))
            elif status == HealthStatus.UNHEALTHY:
                logger.warning(f"{server} in {rack.name} unit {unit} is unhealthy ({score:.2f})")
                self._replace(server, rack, unit, incidents)
                result.replacements_requested += 1

    def _replace(
        self,
        server: Server,
        rack: BaseRack,
        unit: int,
        incidents: set[HealthIncident],
    ) -> None:
        """Record a REPLACE incident and order the replacement.

        The incident is recorded before the request, so it stays in the
        pass result even when the replacement service fails.
        """
        try:
            warranty = self.warranty_client.get_warranty_for_server(server)
        except WarrantyNotFoundError:
            logger.warning(f"No warranty for {server}, requesting replacement without one")
            warranty = Warranty.no_warranty()
        except ClientError as e:
            raise RackMonitorError(
                f"Warranty lookup failed for {server} in rack {rack.name}: {e}",
                server=server,
                rack=rack,
                collaborator="warranty",
            ) from e

        incidents.add(HealthIncident(server, rack, unit, RequestAction.REPLACE))

        try:
            self.replacement_client.request_replacement(rack, unit, warranty)
        except ClientError as e:
            raise RackMonitorError(
                f"Replacement request failed for {server} in rack {rack.name} unit {unit}: {e}",
                server=server,
                rack=rack,
                collaborator="replacement",
            ) from e


def build_rack(rack_config: RackConfig, inventory_url: str | None = None) -> BaseRack:
    """Create the rack described by a RackConfig.

    Racks with static readings are held in memory, the rest are read from
    the inventory service.
    """
    server_units = {Server(server_id): unit for server_id, unit in rack_config.servers.items()}

    if rack_config.health is not None:
        readings = {Server(server_id): score for server_id, score in rack_config.health.items()}
        return StaticRack(rack_config.name, server_units, readings)

    if inventory_url is None:
        raise ConfigurationError(f"Rack {rack_config.name} has no health source")
    return InventoryRack(rack_config.name, server_units, inventory_url)
