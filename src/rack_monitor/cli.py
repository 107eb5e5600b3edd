"""Command-line interface for Rack Monitor."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rack_monitor import __version__
from rack_monitor.config import Config, Thresholds, create_example_config
from rack_monitor.errors import ConfigurationError, RackMonitorError
from rack_monitor.models import HealthStatus, PassResult, RequestAction
from rack_monitor.monitor import RackMonitor

console = Console()

DEFAULT_CONFIG_PATHS = ["rackmon.yaml", "rackmon.yml", "config.yaml", "~/.config/rackmon/config.yaml"]


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def status_color(status: HealthStatus) -> str:
    """Get Rich color for health status."""
    colors = {
        HealthStatus.HEALTHY: "green",
        HealthStatus.SHAKY: "yellow",
        HealthStatus.UNHEALTHY: "red",
    }
    return colors.get(status, "white")


def action_color(action: RequestAction) -> str:
    return "yellow" if action == RequestAction.INSPECT else "red"


def create_incident_table(result: PassResult) -> Table:
    """Create a Rich table listing the incidents of a pass."""
    table = Table(title="Health Incidents", show_header=True, header_style="bold")

    table.add_column("Rack", style="cyan", no_wrap=True)
    table.add_column("Unit", justify="right")
    table.add_column("Server", no_wrap=True)
    table.add_column("Action", justify="center")

    for incident in result.sorted_incidents():
        table.add_row(
            incident.rack.name,
            str(incident.unit),
            incident.server.server_id,
            Text(incident.action.value.upper(), style=action_color(incident.action)),
        )

    return table


def create_summary_panel(result: PassResult) -> Panel:
    """Create a summary panel."""
    if not result.ok:
        overall = "[red]FAILED[/]"
    elif result.replace_count:
        overall = "[red]REPLACEMENTS REQUESTED[/]"
    elif result.inspect_count:
        overall = "[yellow]INSPECTION NEEDED[/]"
    else:
        overall = "[green]HEALTHY[/]"

    summary_parts = [
        f"[bold]Overall Status:[/bold] {overall}",
        f"[bold]Checked:[/bold] {result.racks_checked} racks, {result.servers_checked} servers",
        f"[bold]Incidents:[/bold] "
        f"[yellow]{result.inspect_count}[/] inspect, "
        f"[red]{result.replace_count}[/] replace",
        f"[bold]Started:[/bold] {result.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
    ]

    if result.error is not None:
        summary_parts.append("")
        summary_parts.append(f"[bold red]Error:[/] {result.error}")

    return Panel(
        "\n".join(summary_parts),
        title="Rack Monitoring Pass",
        border_style="red" if not result.ok else "cyan",
    )


def load_config(config: Optional[str]) -> Config:
    """Load the given config file or the first one found in default locations."""
    if config:
        return Config.from_yaml(config)

    for default_path in DEFAULT_CONFIG_PATHS:
        path = Path(default_path).expanduser()
        if path.exists():
            return Config.from_yaml(path)

    console.print("[red]No configuration file found.[/]")
    console.print("Create one with: [cyan]rackmon init[/]")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Rack Monitor - rack-level hardware health monitoring."""
    pass


@main.command()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--json", "output_json",
    is_flag=True,
    help="Output in JSON format",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Log replacement requests instead of submitting them",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
def check(config: Optional[str], output_json: bool, dry_run: bool, log_level: str) -> None:
    """Run one monitoring pass over all configured racks."""
    setup_logging(log_level)

    try:
        cfg = load_config(config)
        monitor = RackMonitor.from_config(cfg, dry_run=dry_run)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/] {e}")
        sys.exit(1)

    try:
        result = monitor.monitor_racks()
    except RackMonitorError:
        result = monitor.get_last_result()

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        console.print(create_summary_panel(result))
        if result.incidents:
            console.print(create_incident_table(result))

    # Exit with error code on failure or replacements, 2 for inspections only
    if not result.ok or result.replace_count:
        sys.exit(1)
    elif result.inspect_count:
        sys.exit(2)


@main.command()
@click.argument("score", type=float)
@click.option("--shaky", default=0.9, type=float, help="Shaky threshold (default: 0.9)")
@click.option("--unhealthy", default=0.8, type=float, help="Unhealthy threshold (default: 0.8)")
def classify(score: float, shaky: float, unhealthy: float) -> None:
    """Classify a single health score."""
    thresholds = Thresholds(shaky=shaky, unhealthy=unhealthy)
    try:
        thresholds.validate()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/]")
        sys.exit(1)

    status = thresholds.classify(score)
    console.print(Text(status.value.upper(), style=status_color(status)))


@main.command()
@click.option(
    "-o", "--output",
    default="rackmon.yaml",
    help="Output file path",
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing file",
)
def init(output: str, force: bool) -> None:
    """Create an example configuration file."""
    path = Path(output)

    if path.exists() and not force:
        console.print(f"[red]File already exists: {path}[/]")
        console.print("Use --force to overwrite")
        sys.exit(1)

    example = create_example_config()
    example.to_yaml(path)

    console.print(f"[green]Created example configuration: {path}[/]")
    console.print("Edit this file to add your racks and service endpoints.")


if __name__ == "__main__":
    main()
