"""
Platform detection helpers for Hostscan.

Reads the OS release descriptor so the rest of the codebase can work with a
normalized OS name and version instead of parsing ``/etc/os-release``
itself.
"""

import logging
import platform
import re
import sys
from dataclasses import dataclass

from hostscan_py.errors import UnsupportedPlatformError

logger = logging.getLogger("hostscan.platform")

OS_RELEASE_FILE = "/etc/os-release"

_ID_PATTERN = re.compile(r"^ID=(.*)$")
_VERSION_ID_PATTERN = re.compile(r"^VERSION_ID=(.*)$")


@dataclass(frozen=True)
class OSInfo:
    """Normalized operating system name and version."""

    name: str = ""
    version: str = ""


def read_os_info(path: str = OS_RELEASE_FILE) -> OSInfo:
    """
    Parse the ``ID`` and ``VERSION_ID`` entries of an os-release file.

    Surrounding double quotes are stripped from both values. Missing entries
    leave the corresponding field empty.

    Args:
        path: Location of the os-release file

    Returns:
        The parsed ``OSInfo``

    Raises:
        UnsupportedPlatformError: If the file cannot be opened
    """
    logger.debug(
        f"Detecting operating system information "
        f"(platform={sys.platform}, arch={platform.machine()})"
    )

    name = ""
    version = ""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            logger.debug(f"Parsing os release file {path}")
            for line in f:
                line = line.rstrip("\r\n")
                if m := _ID_PATTERN.match(line):
                    name = m.group(1).strip('"')
                elif m := _VERSION_ID_PATTERN.match(line):
                    version = m.group(1).strip('"')
    except OSError as e:
        logger.debug(f"Unable to open os release file {path}: {e}")
        raise UnsupportedPlatformError(path) from e

    return OSInfo(name=name, version=version)
