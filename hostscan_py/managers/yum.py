"""Yum is recognized but package listing is not implemented."""

from hostscan_py.errors import NotYetSupportedError
from hostscan_py.managers import PackageManager
from hostscan_py.runner import CommandRunner


class YumManager(PackageManager):
    name = "yum"

    def list_packages(self, runner: CommandRunner) -> str:
        raise NotYetSupportedError("yum not yet supported")
