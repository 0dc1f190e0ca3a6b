"""
Errors raised while generating a package manifest.

Every fatal condition of the pipeline derives from ``ManifestError`` so the
CLI can handle them in one place. Malformed package lines and kernel
detection failures are not errors; they are logged and skipped.
"""

from typing import List, Sequence

SUPPORTED_PLATFORMS_URL = (
    "https://support.lacework.com/hc/en-us/articles/"
    "360049666194-Host-Vulnerability-Assessment-Overview"
)


class ManifestError(Exception):
    """Base class for package manifest generation failures."""


class UnsupportedPlatformError(ManifestError):
    """The OS release descriptor could not be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"unsupported platform: unable to read {path}\n\n"
            "Package manifests can only be generated on Linux hosts that "
            "provide an os-release file (see os-release(5)) and use one of "
            "the supported package managers.\n\n"
            "For more information about supported platforms, visit:\n"
            f"    {SUPPORTED_PLATFORMS_URL}"
        )


class NoPackageManagerFoundError(ManifestError):
    """None of the supported package managers is present on the host."""

    def __init__(self, attempted: Sequence[str]):
        self.attempted: List[str] = list(attempted)
        super().__init__(
            "unable to find supported package managers. "
            f"Supported package managers are {', '.join(self.attempted)}."
        )


class NotYetSupportedError(ManifestError):
    """The package manager is recognized but not implemented."""


class PackageQueryError(ManifestError):
    """The package manager listing command failed."""


class InternalError(ManifestError):
    """The detected package manager has no implementation."""


class CommandError(Exception):
    """An external command exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        message = f"command '{' '.join(self.argv)}' exited with status {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)
