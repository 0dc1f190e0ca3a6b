"""RPM package manager (RHEL, CentOS, Fedora, Amazon Linux, SUSE)."""

from hostscan_py.managers import PackageManager, remove_epoch
from hostscan_py.manifest import PackageRecord
from hostscan_py.runner import CommandRunner


class RpmManager(PackageManager):
    name = "rpm"

    # Packages without an epoch report 0.
    QUERY = [
        "rpm",
        "-qa",
        "--queryformat",
        "%{NAME},%|EPOCH?{%{EPOCH}}:{0}|:%{VERSION}-%{RELEASE}\n",
    ]
    KERNEL_PACKAGE = "kernel"

    def list_packages(self, runner: CommandRunner) -> str:
        return runner.output(self.QUERY)

    def is_kernel_package(self, record: PackageRecord) -> bool:
        return record.package_name == self.KERNEL_PACKAGE

    def kernel_version(self, record: PackageRecord) -> str:
        return remove_epoch(record.package_version)
