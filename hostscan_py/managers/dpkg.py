"""Debian package manager (Debian, Ubuntu)."""

from hostscan_py.managers import PackageManager
from hostscan_py.manifest import PackageRecord
from hostscan_py.runner import CommandRunner


class DpkgQueryManager(PackageManager):
    name = "dpkg-query"

    QUERY = ["dpkg-query", "--show", "--showformat", "${Package},${Version}\n"]
    KERNEL_PREFIX = "linux-image-"

    def list_packages(self, runner: CommandRunner) -> str:
        return runner.output(self.QUERY)

    def is_kernel_package(self, record: PackageRecord) -> bool:
        return record.package_name.startswith(self.KERNEL_PREFIX)

    def kernel_version(self, record: PackageRecord) -> str:
        # linux-image-5.10.0-21-amd64 -> 5.10.0-21-amd64
        return record.package_name[len(self.KERNEL_PREFIX) :]
