"""Subprocess-based implementation of the ProcessRunnerPort."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Mapping, Sequence

from weaviate_embedded.adapters.ports import ProcessRunnerPort

logger = logging.getLogger(__name__)


class SubprocessProcessRunner:
    """Adapter that runs the engine as a child process via subprocess.Popen.

    The child gets no stdin and runs in its own session (process group on
    Windows) so that terminal signals aimed at the parent do not reach it.
    Output is inherited unless ``inherit_output`` is False, in which case it
    is discarded.

    Attributes:
        inherit_output: Whether the child writes to the parent's stdout/stderr.
    """

    def __init__(self, inherit_output: bool = True) -> None:
        self.inherit_output = inherit_output

    def spawn(self, command: Sequence[str], env: Mapping[str, str]) -> subprocess.Popen:
        """Start ``command`` with environment ``env``.

        Raises:
            OSError: If the executable cannot be started.
        """
        output = None if self.inherit_output else subprocess.DEVNULL
        kwargs: dict = {}
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP
        else:
            kwargs["start_new_session"] = True

        process = subprocess.Popen(
            list(command),
            env=dict(env),
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=output,
            **kwargs,
        )
        logger.debug("Spawned %s with pid %d", command[0], process.pid)
        return process

    def exit_code(self, process: subprocess.Popen) -> int | None:
        return process.poll()

    def terminate(self, process: subprocess.Popen, grace_period: float) -> None:
        """Terminate ``process``, killing it if it outlives ``grace_period``."""
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=grace_period)
        except subprocess.TimeoutExpired:
            logger.warning(
                "Engine pid %d did not stop in %.1fs; killing", process.pid, grace_period
            )
            process.kill()
            process.wait()


# Runtime protocol check
assert isinstance(SubprocessProcessRunner(), ProcessRunnerPort)
