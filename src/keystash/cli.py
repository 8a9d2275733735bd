"""CLI interface for keystash"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keystash.config import CONFIG_FILENAME, get_config, load_config
from keystash.drivers.factory import DRIVERS, build_driver
from keystash.drivers.keyvalue import KeyValueDriver
from keystash.exceptions import ConfigError, InvalidKeyError, UnavailableBackend
from keystash.keys import INSTALL_ID_ENV, decode_key, is_under, normalize_path
from keystash.runtime import mark_cli_context

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="keystash",
    help="Inspect and invalidate keystash caches",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)

DriverOption = Annotated[
    str | None, typer.Option("--driver", "-d", help="Driver name (memory, redis, fake_redis)")
]
NamespaceOption = Annotated[
    str | None, typer.Option("--namespace", "-n", help="Key namespace")
]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to .keystash.yaml")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Inspect and invalidate keystash caches"""
    mark_cli_context()
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def parse_value(value: str) -> Any:
    """Parse a value argument as JSON, falling back to the raw string"""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _open_driver(
    driver: str | None, namespace: str | None, config_path: Path | None
) -> KeyValueDriver:
    try:
        if config_path is None:
            config = get_config().cache
        else:
            config = load_config(config_path).cache
    except ConfigError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from None

    overrides = {}
    if driver:
        overrides["driver"] = driver
    if namespace:
        overrides["namespace"] = namespace
    if overrides:
        config = config.model_copy(update=overrides)

    # A generated namespace differs on every invocation
    if not config.namespace and config.install_id is None and not os.getenv(INSTALL_ID_ENV):
        console.print(
            "[bold red]✗ No namespace:[/bold red] pass --namespace, set install_id "
            f"in {CONFIG_FILENAME} or export {INSTALL_ID_ENV}"
        )
        raise typer.Exit(1)

    try:
        instance = build_driver(config)
    except UnavailableBackend as e:
        console.print(f"[bold red]✗ Driver unavailable:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from None
    except ValueError as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]")
        raise typer.Exit(1) from None

    logger.info(f"Using {config.driver} driver with namespace {instance.namespace}")
    return instance


def _parse_path(path: str) -> tuple[str, ...]:
    try:
        return normalize_path(path)
    except InvalidKeyError as e:
        console.print(f"[bold red]✗ Invalid key:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from None


def _format_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


@app.command()
def drivers() -> None:
    """List the supported drivers with their capabilities"""
    table = Table(title="Cache drivers")
    table.add_column("Name", style="cyan")
    table.add_column("Class")
    table.add_column("Available")
    table.add_column("Persistent")

    for name, driver_class in DRIVERS.items():
        available = driver_class.is_available()
        table.add_row(
            name,
            driver_class.__name__,
            "[green]✓[/green]" if available else "[red]✗[/red]",
            "✓" if driver_class.is_persistent() else "✗",
        )

    console.print(table)


@app.command()
def get(
    path: Annotated[str, typer.Argument(help="Key path, e.g. users/42/profile")],
    driver: DriverOption = None,
    namespace: NamespaceOption = None,
    config: ConfigOption = None,
) -> None:
    """Print the value stored under a key path

    Examples:
        keystash get users/42/profile
        keystash get users/42 --driver redis
    """
    segments = _parse_path(path)
    instance = _open_driver(driver, namespace, config)

    entry = instance.get_entry(segments)
    if entry is None:
        console.print(f"[yellow]miss:[/yellow] {'/'.join(segments)}")
        raise typer.Exit(1)

    value = entry.data
    if isinstance(value, dict | list):
        value = json.dumps(value, indent=2)
    console.print(value, markup=False)
    console.print(f"[dim]expires {_format_time(entry.expiration)}[/dim]")


@app.command("set")
def set_value(
    path: Annotated[str, typer.Argument(help="Key path, e.g. users/42/profile")],
    value: Annotated[str, typer.Argument(help="Value (JSON or plain string)")],
    ttl: Annotated[int, typer.Option("--ttl", "-t", help="Seconds until the entry expires")] = 300,
    driver: DriverOption = None,
    namespace: NamespaceOption = None,
    config: ConfigOption = None,
) -> None:
    """Store a value under a key path

    Examples:
        keystash set users/42/profile '{"name": "Ada"}'
        keystash set flags/beta true --ttl 60
    """
    segments = _parse_path(path)
    instance = _open_driver(driver, namespace, config)

    if instance.store_data(segments, parse_value(value), time.time() + ttl):
        console.print(f"✓ Stored [green]{'/'.join(segments)}[/green]")
    else:
        console.print(f"[bold red]✗ Store rejected {'/'.join(segments)}[/bold red]")
        raise typer.Exit(1)


@app.command()
def clear(
    path: Annotated[
        str | None, typer.Argument(help="Key path to clear; omit to clear everything")
    ] = None,
    driver: DriverOption = None,
    namespace: NamespaceOption = None,
    config: ConfigOption = None,
) -> None:
    """Clear a key path and everything below it

    Examples:
        keystash clear users/42
        keystash clear
    """
    segments = _parse_path(path) if path else ()
    instance = _open_driver(driver, namespace, config)

    if instance.clear(segments):
        target = "/".join(segments) if segments else "all entries"
        console.print(f"✓ Cleared [green]{target}[/green]")
    else:
        console.print("[bold red]✗ Clear failed[/bold red]")
        raise typer.Exit(1)


@app.command()
def keys(
    driver: DriverOption = None,
    namespace: NamespaceOption = None,
    config: ConfigOption = None,
) -> None:
    """List the key paths stored under the namespace"""
    instance = _open_driver(driver, namespace, config)

    table = Table(title=f"Keys in {instance.namespace}")
    table.add_column("Path", style="cyan")
    table.add_column("TTL (s)", justify="right")
    table.add_column("Hits", justify="right")

    count = 0
    for entry in instance.store.list_entries():
        if not is_under(entry.key, instance.namespace, ()):
            continue
        path = decode_key(instance.namespace, entry.key)
        table.add_row(
            "/".join(path) if path else "",
            "" if entry.ttl_seconds is None else str(entry.ttl_seconds),
            "" if entry.hit_count is None else str(entry.hit_count),
        )
        count += 1

    if count:
        console.print(table)
    else:
        console.print(f"[dim]No keys in {instance.namespace}[/dim]")


if __name__ == "__main__":
    app()
