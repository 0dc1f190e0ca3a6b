"""
Package manager package for Hostscan.

This module provides the base class for package managers and the lookup of
implementations by name. Each implementation knows how to list installed
packages and how to recognize its kernel packages.
"""

import abc
from typing import Dict, Type

from hostscan_py.errors import InternalError
from hostscan_py.manifest import PackageRecord
from hostscan_py.runner import CommandRunner

# Detection order; the first manager found on the host wins.
SUPPORTED_PACKAGE_MANAGERS = ("dpkg-query", "rpm")


def remove_epoch(version: str) -> str:
    """Strip an RPM epoch prefix such as ``1:`` from *version*."""
    if ":" in version:
        return version.split(":", 1)[1]
    return version


class PackageManager(abc.ABC):
    """Base class for package managers."""

    name: str = ""

    @abc.abstractmethod
    def list_packages(self, runner: CommandRunner) -> str:
        """
        Query the installed packages.

        Args:
            runner: Runner used to invoke the package manager

        Returns:
            One ``name,version`` line per installed package

        Raises:
            CommandError: If the listing command fails
            OSError: If the listing command cannot be started
        """
        pass

    def is_kernel_package(self, record: PackageRecord) -> bool:
        """Return True when *record* is a kernel image package."""
        return False

    def kernel_version(self, record: PackageRecord) -> str:
        """Return the kernel version that *record* provides."""
        return record.package_version

    def is_inactive_kernel(self, record: PackageRecord, active_kernel: str) -> bool:
        """
        Return True when *record* is a kernel package that is not running.

        Kernel release strings often carry architecture or build suffixes,
        so the package's kernel version only has to appear in
        *active_kernel*.
        """
        if not self.is_kernel_package(record):
            return False
        return self.kernel_version(record) not in active_kernel


from hostscan_py.managers.apk import ApkManager  # noqa: E402
from hostscan_py.managers.dpkg import DpkgQueryManager  # noqa: E402
from hostscan_py.managers.rpm import RpmManager  # noqa: E402
from hostscan_py.managers.yum import YumManager  # noqa: E402

PACKAGE_MANAGERS: Dict[str, Type[PackageManager]] = {
    RpmManager.name: RpmManager,
    DpkgQueryManager.name: DpkgQueryManager,
    ApkManager.name: ApkManager,
    YumManager.name: YumManager,
}


def get_package_manager(name: str) -> PackageManager:
    """
    Return the implementation for the package manager called *name*.

    Raises:
        InternalError: If no implementation exists, meaning detection
            returned a manager that enumeration does not handle
    """
    try:
        return PACKAGE_MANAGERS[name]()
    except KeyError:
        raise InternalError(
            f"package manager '{name}' was detected but is not handled; "
            "this is most likely a bug, please report it."
        ) from None
