"""
Tests for the config module.
"""

import os
from pathlib import Path
from unittest.mock import patch

from hostscan_py.config import (
    HostscanConfig,
    TelemetryConfig,
    default_config_path,
)


def test_default_config_path() -> None:
    """default_config_path falls back to ~/.config/hostscan/config.yaml."""
    env = {"HOME": str(Path.home())}
    with patch.dict(os.environ, env, clear=True):
        result = default_config_path()
        assert result == Path.home() / ".config" / "hostscan" / "config.yaml"


def test_default_config_path_xdg() -> None:
    """default_config_path respects $XDG_CONFIG_HOME."""
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": "/custom/config"}):
        result = default_config_path()
        assert result == Path("/custom/config/hostscan/config.yaml")


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    """Loading a non-existent file returns the default config."""
    cfg = HostscanConfig.load(tmp_path / "nonexistent.yaml")
    assert cfg.os_release_file == "/etc/os-release"
    assert cfg.package_managers == ["dpkg-query", "rpm"]
    assert cfg.telemetry == TelemetryConfig()


def test_empty_file_returns_defaults(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("")
    cfg = HostscanConfig.from_file(p)
    assert cfg.package_managers == ["dpkg-query", "rpm"]


def test_full_config_parsing(tmp_path: Path) -> None:
    """A fully-populated config file is parsed correctly."""
    p = tmp_path / "config.yaml"
    p.write_text("""\
os_release_file: "/usr/lib/os-release"
package_managers:
  - rpm
  - dpkg-query
  - apk
telemetry:
  enabled: false
  events_file: "~/hostscan/events.jsonl"
""")
    cfg = HostscanConfig.from_file(p)
    assert cfg.os_release_file == "/usr/lib/os-release"
    assert cfg.package_managers == ["rpm", "dpkg-query", "apk"]
    assert cfg.telemetry.enabled is False
    assert cfg.telemetry.events_file == Path.home() / "hostscan" / "events.jsonl"


def test_unknown_package_managers_skipped(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("""\
package_managers:
  - pacman
  - rpm
""")
    cfg = HostscanConfig.from_file(p)
    assert cfg.package_managers == ["rpm"]


def test_only_unknown_package_managers_uses_defaults(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("package_managers: [pacman, brew]\n")
    cfg = HostscanConfig.from_file(p)
    assert cfg.package_managers == ["dpkg-query", "rpm"]


def test_invalid_telemetry_section(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("telemetry: off-please\n")
    cfg = HostscanConfig.from_file(p)
    assert cfg.telemetry == TelemetryConfig()


def test_invalid_yaml_returns_defaults(tmp_path: Path) -> None:
    """Malformed YAML returns the default config instead of raising."""
    p = tmp_path / "config.yaml"
    p.write_text(": : : [invalid yaml")
    cfg = HostscanConfig.from_file(p)
    assert cfg.os_release_file == "/etc/os-release"


def test_from_dict_non_dict() -> None:
    """from_dict with a non-dict value returns defaults."""
    cfg = HostscanConfig.from_dict("not a dict")  # type: ignore[arg-type]
    assert cfg.package_managers == ["dpkg-query", "rpm"]


def test_telemetry_disabled_by_environment() -> None:
    cfg = HostscanConfig()
    with patch.dict(os.environ, {"HOSTSCAN_TELEMETRY_DISABLE": "1"}):
        assert cfg.telemetry_enabled is False
    with patch.dict(os.environ, {}, clear=True):
        assert cfg.telemetry_enabled is True


def test_load_uses_default_path(tmp_path: Path) -> None:
    """load() without arguments uses default_config_path()."""
    with patch(
        "hostscan_py.config.default_config_path", return_value=tmp_path / "nope.yaml"
    ):
        cfg = HostscanConfig.load()
    assert cfg.os_release_file == "/etc/os-release"


def test_invalid_os_release_file(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("os_release_file: 3\n")
    cfg = HostscanConfig.from_file(p)
    assert cfg.os_release_file == "/etc/os-release"
