"""
Package manager detection.

Each candidate is looked up with ``which``. When ``which`` itself cannot be
run, or dies without an exit status, the POSIX shell builtin
``command -v`` is tried instead.
"""

import logging
from typing import Sequence

from hostscan_py.errors import NoPackageManagerFoundError
from hostscan_py.managers import SUPPORTED_PACKAGE_MANAGERS
from hostscan_py.runner import CommandRunner

logger = logging.getLogger(__name__)


def _check_with_command_v(runner: CommandRunner, manager: str) -> bool:
    argv = ["sh", "-c", 'command -v "$1"', "sh", manager]
    try:
        result = runner.run(argv)
    except OSError as e:
        logger.debug(f"Unable to run 'command -v {manager}': {e}")
        return False
    return result.returncode == 0


def check_package_manager(runner: CommandRunner, manager: str) -> bool:
    """Return True when *manager* is found on the host's PATH."""
    try:
        result = runner.run(["which", manager])
    except OSError as e:
        logger.debug(f"Error running 'which {manager}': {e}")
        logger.warning("Something went wrong with 'which', trying native command")
        return _check_with_command_v(runner, manager)

    if result.returncode < 0:
        # Killed by a signal, no usable exit status.
        logger.warning(
            f"'which {manager}' terminated by signal {-result.returncode}, "
            "trying native command"
        )
        return _check_with_command_v(runner, manager)
    return result.returncode == 0


def detect_package_manager(
    runner: CommandRunner,
    managers: Sequence[str] = SUPPORTED_PACKAGE_MANAGERS,
) -> str:
    """
    Return the first package manager in *managers* present on the host.

    Args:
        runner: Runner used for the lookups
        managers: Candidates, in order of preference

    Raises:
        NoPackageManagerFoundError: If none of the candidates is present
    """
    logger.debug("Detecting package manager...")
    for manager in managers:
        if check_package_manager(runner, manager):
            logger.debug(f"Detected package manager: {manager}")
            return manager
    raise NoPackageManagerFoundError(managers)
