"""
Package manifest generation for Hostscan.

This package builds the inventory of installed OS packages that is submitted
for vulnerability assessment. It detects the package manager, parses its
listing output and removes kernel packages that are installed but not
running.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

import orjson

from hostscan_py.platform import OSInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageRecord:
    """A single installed package."""

    os_name: str
    os_version: str
    package_name: str
    package_version: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "os": self.os_name,
            "os_ver": self.os_version,
            "pkg": self.package_name,
            "pkg_ver": self.package_version,
        }


@dataclass
class PackageManifest:
    """Ordered list of package records, in enumeration order."""

    records: List[PackageRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self.records)

    def to_dict(self) -> Dict[str, Any]:
        """Return the manifest in the shape expected by the scan API."""
        return {"os_pkg_info_list": [r.to_dict() for r in self.records]}

    def to_json(self, indent: bool = False) -> str:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option).decode("utf-8")


def parse_package_query(output: str, os_info: OSInfo) -> PackageManifest:
    """
    Parse ``name,version`` lines emitted by a package manager query.

    Exactly one trailing newline is trimmed before splitting into lines.
    Lines that do not split into exactly two comma-separated fields are
    skipped with a warning.

    Args:
        output: Raw package manager output
        os_info: OS name and version attached to every record

    Returns:
        The parsed manifest
    """
    if output.endswith("\n"):
        output = output[:-1]

    manifest = PackageManifest()
    for line in output.split("\n"):
        details = line.split(",")
        if len(details) != 2:
            logger.warning(
                f"Unable to parse package, expected 2 fields, skipping: {line!r}"
            )
            continue
        manifest.records.append(
            PackageRecord(
                os_name=os_info.name,
                os_version=os_info.version,
                package_name=details[0],
                package_version=details[1],
            )
        )
    return manifest
