"""
Command execution for Hostscan.

All external programs (package managers, ``which``, ``uname``) are run
through a ``CommandRunner`` so the manifest pipeline can be exercised in
tests without touching real system binaries.
"""

import abc
import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Sequence

from hostscan_py.errors import CommandError

logger = logging.getLogger("hostscan.runner")


@dataclass
class CommandResult:
    """Captured outcome of a finished command."""

    argv: List[str]
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(abc.ABC):
    """Base class for command runners."""

    @abc.abstractmethod
    def run(self, argv: Sequence[str]) -> CommandResult:
        """
        Run a command and capture its output.

        Args:
            argv: Program and arguments

        Returns:
            The captured result, whatever the exit status

        Raises:
            OSError: If the program could not be started
        """
        pass

    def output(self, argv: Sequence[str]) -> str:
        """
        Run a command and return its standard output.

        Raises:
            CommandError: If the command exits with a non-zero status
            OSError: If the program could not be started
        """
        result = self.run(argv)
        if result.returncode != 0:
            raise CommandError(result.argv, result.returncode, result.stderr)
        return result.stdout


class SubprocessRunner(CommandRunner):
    """Runs commands on the local host with ``subprocess``."""

    def run(self, argv: Sequence[str]) -> CommandResult:
        cmd = [str(arg) for arg in argv]
        cmd_str = " ".join(shlex.quote(arg) for arg in cmd)
        logger.debug(f"Running command: {cmd_str}")

        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
        if result.returncode != 0:
            logger.debug(f"Command {cmd_str} exited with {result.returncode}")
        return CommandResult(
            argv=cmd,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
