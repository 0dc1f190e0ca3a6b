"""
Shared fixtures for the unit tests.
"""

from typing import Callable, Dict, Sequence, Tuple, Union
from unittest.mock import MagicMock

import pytest

from hostscan_py.runner import CommandResult, CommandRunner

# (returncode, stdout), or an exception to raise
Response = Union[Tuple[int, str], Exception]


@pytest.fixture
def make_runner() -> Callable[[Dict[Tuple[str, ...], Response]], MagicMock]:
    """
    Build a mock CommandRunner from a table of argv tuples to responses.

    Commands missing from the table behave like a program that is not
    installed.
    """

    def _make(responses: Dict[Tuple[str, ...], Response]) -> MagicMock:
        runner = MagicMock(spec=CommandRunner)

        def run(argv: Sequence[str]) -> CommandResult:
            response = responses.get(tuple(argv))
            if response is None:
                raise FileNotFoundError(argv[0])
            if isinstance(response, Exception):
                raise response
            returncode, stdout = response
            return CommandResult(list(argv), returncode, stdout, "")

        runner.run.side_effect = run
        runner.output.side_effect = lambda argv: CommandRunner.output(runner, argv)
        return runner

    return _make
