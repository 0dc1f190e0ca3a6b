"""
Alpine package manager.

``apk`` has no query format, so names and versions are rebuilt from two
listings: ``apk info`` (bare names) and ``apk info -v`` (``name-version``).
Both listings are assumed to come back in the same order.
"""

import logging
from typing import List

from hostscan_py.managers import PackageManager
from hostscan_py.runner import CommandRunner

logger = logging.getLogger(__name__)


def _lines(output: str) -> List[str]:
    if output.endswith("\n"):
        output = output[:-1]
    return output.split("\n")


class ApkManager(PackageManager):
    name = "apk"

    NAMES_QUERY = ["apk", "info"]
    VERSIONS_QUERY = ["apk", "info", "-v"]

    def list_packages(self, runner: CommandRunner) -> str:
        names = _lines(runner.output(self.NAMES_QUERY))
        versioned = _lines(runner.output(self.VERSIONS_QUERY))

        if len(names) != len(versioned):
            logger.warning(
                f"apk returned {len(names)} package names but {len(versioned)} "
                "versioned entries; only the first "
                f"{min(len(names), len(versioned))} are paired"
            )

        pairs = []
        for name, entry in zip(names, versioned):
            # musl-1.2.4-r2 -> 1.2.4-r2
            version = entry.replace(name, "", 1).strip("-")
            pairs.append(f"{name},{version}")
        return "\n".join(pairs)
