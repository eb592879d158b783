"""Fake process runner for testing.

Provides test doubles for ProcessRunnerPort and the processes it spawns,
so lifecycle logic can be tested without starting real programs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence


@dataclass
class FakeProcess:
    """Stand-in for a spawned process.

    Attributes:
        pid: Fake process identifier.
        command: Command line the process was spawned with.
        env: Environment the process was spawned with.
        returncode: Exit code, None while "running".
        terminated: Whether terminate() was called on it.
    """

    pid: int
    command: list[str]
    env: dict[str, str] = field(repr=False)
    returncode: int | None = None
    terminated: bool = False


class FakeProcessRunner:
    """Fake implementation of ProcessRunnerPort for testing.

    Example:
        >>> runner = FakeProcessRunner()
        >>> process = runner.spawn(["weaviate"], {})
        >>> runner.exit_code(process) is None
        True
        >>> runner.terminate(process, grace_period=1.0)
        >>> process.terminated
        True
    """

    def __init__(self, first_pid: int = 4242) -> None:
        self._next_pid = first_pid
        self._spawn_exception: BaseException | None = None
        self._exit_immediately: int | None = None
        self.processes: list[FakeProcess] = []
        self.terminate_calls: list[tuple[FakeProcess, float]] = []

    def set_spawn_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from spawn(), or None to clear."""
        self._spawn_exception = exception

    def exit_immediately(self, code: int | None) -> None:
        """Make newly spawned processes report ``code`` as already exited."""
        self._exit_immediately = code

    @property
    def last_process(self) -> FakeProcess:
        return self.processes[-1]

    def spawn(self, command: Sequence[str], env: Mapping[str, str]) -> FakeProcess:
        if self._spawn_exception is not None:
            raise self._spawn_exception
        process = FakeProcess(
            pid=self._next_pid,
            command=list(command),
            env=dict(env),
            returncode=self._exit_immediately,
        )
        self._next_pid += 1
        self.processes.append(process)
        return process

    def exit_code(self, process: FakeProcess) -> int | None:
        return process.returncode

    def terminate(self, process: FakeProcess, grace_period: float) -> None:
        self.terminate_calls.append((process, grace_period))
        if process.returncode is None:
            process.terminated = True
            process.returncode = -15
