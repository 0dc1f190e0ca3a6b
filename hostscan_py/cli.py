"""
Command-line interface for Hostscan.

This module provides the command-line entry point for the Hostscan host
vulnerability assessment client.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import orjson
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hostscan_py import __version__
from hostscan_py.config import HostscanConfig
from hostscan_py.errors import ManifestError
from hostscan_py.manifest import PackageManifest
from hostscan_py.manifest.generate import ManifestGenerator
from hostscan_py.telemetry import (
    EventSink,
    JsonLinesEventSink,
    LoggingEventSink,
    NullEventSink,
)

# Logs go to stderr; stdout carries the manifest.
console = Console()
err_console = Console(stderr=True)
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
)
logger = logging.getLogger("hostscan")


class JsonLogFormatter(logging.Formatter):
    """Formats each log record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(data).decode("utf-8")


app = typer.Typer(
    help="Host vulnerability assessment client.",
    add_completion=False,
)


def log_error(message: str) -> None:
    """Log an error message to both logger and console."""
    logger.error(message)
    err_console.print(f"[red]{message}[/red]")
    return None


def build_event_sink(config: HostscanConfig) -> EventSink:
    """Return the telemetry sink selected by *config*."""
    if not config.telemetry_enabled:
        return NullEventSink()
    if config.telemetry.events_file:
        return JsonLinesEventSink(config.telemetry.events_file)
    return LoggingEventSink()


def print_manifest_table(manifest: PackageManifest) -> None:
    table = Table(title="Package Manifest")
    table.add_column("OS")
    table.add_column("OS Version")
    table.add_column("Package")
    table.add_column("Version")

    for record in manifest:
        table.add_row(
            record.os_name,
            record.os_version,
            record.package_name,
            record.package_version,
        )
    console.print(table)


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output."
    ),
    json: bool = typer.Option(False, "--json", help="Output logs in JSON format."),
    version: bool = typer.Option(
        False, "--version", help="Show the application version and exit."
    ),
) -> None:
    """
    Hostscan: inventory what is installed, report only what is running.
    """
    if version:
        console.print(f"Hostscan version: {__version__}")
        raise typer.Exit()

    if verbose:
        logging.getLogger("hostscan").setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    if json:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
        logging.basicConfig(
            level=logging.INFO if not verbose else logging.DEBUG,
            handlers=[handler],
        )
        logger.debug("JSON logging enabled")


@app.command(name="generate-pkg-manifest")
def generate_pkg_manifest(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the manifest to this file instead of stdout.",
        ),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            help="Path to the config file (default: ~/.config/hostscan/config.yaml).",
        ),
    ] = None,
    table: Annotated[
        bool,
        typer.Option("--table", help="Show the manifest as a table instead of JSON."),
    ] = False,
) -> None:
    """
    Generate the package manifest of this host.

    Inactive kernel packages are removed so that only the running kernel is
    assessed.
    """
    config = HostscanConfig.load(config_file)
    event_sink = build_event_sink(config)

    generator = ManifestGenerator(
        event_sink=event_sink,
        package_managers=config.package_managers,
        os_release_file=config.os_release_file,
    )

    logger.info("Generating package manifest...")
    try:
        manifest = generator.generate()
    except ManifestError as e:
        generator.event.error = str(e)
        event_sink.send(generator.event)
        log_error(f"Unable to generate package manifest: {e}")
        raise typer.Exit(1) from e

    logger.info(
        f"Generated manifest with {len(manifest)} packages "
        f"in {generator.event.duration_ms} ms"
    )

    if table:
        print_manifest_table(manifest)
        return

    manifest_json = manifest.to_json(indent=True)
    if output:
        try:
            output.write_text(manifest_json + "\n")
        except OSError as e:
            log_error(f"Failed to write manifest to {output}: {e}")
            raise typer.Exit(1) from e
        logger.info(f"Package manifest written to {output}")
    else:
        typer.echo(manifest_json)


@app.command()
def version() -> None:
    """Show the application version and exit."""
    console.print(f"Hostscan version: {__version__}")


if __name__ == "__main__":
    app()
