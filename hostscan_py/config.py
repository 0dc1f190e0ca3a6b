"""
Configuration file support for Hostscan.

Loads settings from ``~/.config/hostscan/config.yaml`` (or
``$XDG_CONFIG_HOME/hostscan/config.yaml``) and exposes them as typed
dataclasses that the CLI can merge with command-line flags.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from hostscan_py.managers import PACKAGE_MANAGERS, SUPPORTED_PACKAGE_MANAGERS
from hostscan_py.platform import OS_RELEASE_FILE

logger = logging.getLogger("hostscan.config")

TELEMETRY_DISABLE_ENV = "HOSTSCAN_TELEMETRY_DISABLE"


def default_config_path() -> Path:
    """Return the default configuration file path.

    Uses ``$XDG_CONFIG_HOME/hostscan/config.yaml`` when set, otherwise
    falls back to ``~/.config/hostscan/config.yaml``.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hostscan" / "config.yaml"
    return Path.home() / ".config" / "hostscan" / "config.yaml"


@dataclass
class TelemetryConfig:
    """Telemetry settings from the configuration file."""

    enabled: bool = True
    events_file: Optional[Path] = None


@dataclass
class HostscanConfig:
    """Top-level configuration loaded from the YAML file."""

    os_release_file: str = OS_RELEASE_FILE
    package_managers: List[str] = field(
        default_factory=lambda: list(SUPPORTED_PACKAGE_MANAGERS)
    )
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @property
    def telemetry_enabled(self) -> bool:
        """Telemetry is on unless the config or the environment disables it."""
        if os.environ.get(TELEMETRY_DISABLE_ENV):
            return False
        return self.telemetry.enabled

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostscanConfig":
        """Construct a ``HostscanConfig`` from a parsed YAML dictionary."""
        if not isinstance(data, dict):
            return cls()

        package_managers: List[str] = []
        for name in data.get("package_managers") or []:
            if name not in PACKAGE_MANAGERS:
                logger.warning(f"Skipping unknown package manager: {name}")
                continue
            package_managers.append(name)
        if not package_managers:
            package_managers = list(SUPPORTED_PACKAGE_MANAGERS)

        telemetry_data = data.get("telemetry") or {}
        if not isinstance(telemetry_data, dict):
            logger.warning(f"Ignoring invalid telemetry section: {telemetry_data}")
            telemetry_data = {}
        events_file = telemetry_data.get("events_file")
        telemetry = TelemetryConfig(
            enabled=bool(telemetry_data.get("enabled", True)),
            events_file=Path(events_file).expanduser() if events_file else None,
        )

        os_release_file = data.get("os_release_file") or OS_RELEASE_FILE
        if not isinstance(os_release_file, str):
            logger.warning(f"Ignoring invalid os_release_file: {os_release_file}")
            os_release_file = OS_RELEASE_FILE

        return cls(
            os_release_file=os_release_file,
            package_managers=package_managers,
            telemetry=telemetry,
        )

    @classmethod
    def from_file(cls, path: Path) -> "HostscanConfig":
        """Read a YAML file and return a ``HostscanConfig``.

        Returns a default config on any error.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f.read())
            if data is None:
                return cls()
            return cls.from_dict(data)
        except (IOError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {path}: {e}")
            return cls()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "HostscanConfig":
        """Load config from *config_path* or the default location.

        Returns a default config if the file does not exist.
        """
        path = config_path or default_config_path()
        if not path.exists():
            return cls()
        return cls.from_file(path)
