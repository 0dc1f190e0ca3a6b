"""
Active kernel filtering.

Most distributions keep the previous kernels installed as a fallback in case
a new kernel does not boot. Those packages are not running and would only
produce false positives, so every kernel package that does not match the
running kernel release is dropped from the manifest.
"""

import logging
from typing import Optional

from hostscan_py.errors import CommandError
from hostscan_py.managers import PackageManager
from hostscan_py.manifest import PackageManifest
from hostscan_py.runner import CommandRunner
from hostscan_py.telemetry import Event

logger = logging.getLogger(__name__)

KERNEL_QUERY = ["uname", "-r"]


def detect_active_kernel(runner: CommandRunner) -> Optional[str]:
    """Return the running kernel release, or None if it cannot be determined."""
    try:
        kernel = runner.output(KERNEL_QUERY)
    except (CommandError, OSError) as e:
        logger.warning(f"Unable to detect active kernel with 'uname -r': {e}")
        return None
    if kernel.endswith("\n"):
        kernel = kernel[:-1]
    return kernel


def remove_inactive_kernels(
    manifest: PackageManifest,
    manager: PackageManager,
    active_kernel: str,
    event: Optional[Event] = None,
) -> PackageManifest:
    """
    Return a new manifest without the kernel packages that are not running.

    The input manifest is left untouched and the order of the remaining
    records is preserved.
    """
    filtered = PackageManifest()
    for i, record in enumerate(manifest.records):
        if manager.is_inactive_kernel(record, active_kernel):
            logger.warning(
                "Inactive kernel package detected, removing from manifest: "
                f"{record.package_name} {record.package_version} "
                f"(active kernel {active_kernel})"
            )
            if event is not None:
                event.add_feature_field(
                    f"kernel_suppressed_{i}",
                    f"{record.package_name}-{record.package_version}",
                )
            continue
        filtered.records.append(record)

    if len(filtered) != len(manifest):
        logger.debug(f"Package manifest modified: {filtered.to_json()}")
    return filtered


def filter_inactive_kernels(
    manifest: PackageManifest,
    manager: PackageManager,
    runner: CommandRunner,
    event: Optional[Event] = None,
) -> PackageManifest:
    """
    Detect the running kernel and drop inactive kernel packages.

    Kernel detection is best effort: if it fails the manifest is returned
    unchanged.
    """
    active_kernel = detect_active_kernel(runner)
    if event is not None:
        event.add_feature_field("active_kernel", active_kernel or "")
    if active_kernel is None:
        return manifest
    return remove_inactive_kernels(manifest, manager, active_kernel, event)
