"""
Package manifest assembly.

Ties the pipeline together: read the OS release, detect the package
manager, list and parse the installed packages, then drop inactive kernel
packages.
"""

import logging
import time
from typing import Optional, Sequence

from hostscan_py.errors import CommandError, PackageQueryError
from hostscan_py.managers import SUPPORTED_PACKAGE_MANAGERS, get_package_manager
from hostscan_py.manifest import PackageManifest, parse_package_query
from hostscan_py.manifest.detect import detect_package_manager
from hostscan_py.manifest.kernel import filter_inactive_kernels
from hostscan_py.platform import OS_RELEASE_FILE, read_os_info
from hostscan_py.runner import CommandRunner, SubprocessRunner
from hostscan_py.telemetry import Event, EventSink, LoggingEventSink

logger = logging.getLogger(__name__)

FEATURE_GEN_PKG_MANIFEST = "gen_pkg_manifest"


class ManifestGenerator:
    """Generates the package manifest of the local host."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        event_sink: Optional[EventSink] = None,
        package_managers: Sequence[str] = SUPPORTED_PACKAGE_MANAGERS,
        os_release_file: str = OS_RELEASE_FILE,
    ):
        """
        Initialize the generator.

        Args:
            runner: Runner for external commands
            event_sink: Destination of the telemetry event of a successful run
            package_managers: Package managers to detect, in order of preference
            os_release_file: Location of the os-release file
        """
        self.runner = runner or SubprocessRunner()
        self.event_sink = event_sink or LoggingEventSink()
        self.package_managers = tuple(package_managers)
        self.os_release_file = os_release_file

        # Event of the most recent run.
        self.event = Event(feature=FEATURE_GEN_PKG_MANIFEST)

    def generate(self) -> PackageManifest:
        """
        Generate the package manifest.

        Returns:
            The manifest with inactive kernel packages removed

        Raises:
            ManifestError: If any step of the pipeline fails
        """
        self.event = Event(feature=FEATURE_GEN_PKG_MANIFEST)
        start = time.monotonic()
        try:
            manifest = self._generate(self.event)
        finally:
            self.event.duration_ms = int((time.monotonic() - start) * 1000)

        # Failures are reported by the caller.
        self.event_sink.send(self.event)
        return manifest

    def _generate(self, event: Event) -> PackageManifest:
        os_info = read_os_info(self.os_release_file)
        event.add_feature_field("os", os_info.name)
        event.add_feature_field("os_ver", os_info.version)

        manager_name = detect_package_manager(self.runner, self.package_managers)
        event.add_feature_field("pkg_manager", manager_name)

        manager = get_package_manager(manager_name)
        try:
            query = manager.list_packages(self.runner)
        except (CommandError, OSError) as e:
            raise PackageQueryError(
                f"unable to query packages from package manager: {e}"
            ) from e
        logger.debug(f"Package manager query output:\n{query}")

        manifest = parse_package_query(query, os_info)
        event.add_feature_field("total_manifest_pkgs", len(manifest))
        logger.debug(f"Package manifest: {manifest.to_json()}")

        return filter_inactive_kernels(manifest, manager, self.runner, event)
