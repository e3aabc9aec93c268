"""Child process execution for PVS-Studio tools and package managers."""

import asyncio
import logging
from dataclasses import dataclass
from os import PathLike
from typing import List, Sequence, Union

from pvsaction.exceptions import ProcessFailedError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Result of a finished child process."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Combined stdout and stderr."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class ProcessRunner:
    """Run executables and capture their output.

    Arguments are passed as an argument vector; no shell is involved, so the
    executable path is always a single token even when it contains spaces.
    """

    async def run(
        self,
        executable: Union[str, PathLike],
        args: Sequence[str] = (),
        check: bool = True,
    ) -> ProcessResult:
        """Run a command and wait for it to finish.

        Args:
            executable: Path or name of the program
            args: Arguments passed to the program
            check: Raise ProcessFailedError on a non-zero exit code

        Returns:
            ProcessResult with the exit code and decoded output
        """
        cmd: List[str] = [str(executable), *args]
        logger.info("Running: %s", " ".join(_quote(part) for part in cmd))

        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()

        stdout_str = stdout.decode("utf-8", errors="replace") if stdout else ""
        stderr_str = stderr.decode("utf-8", errors="replace") if stderr else ""
        result = ProcessResult(process.returncode, stdout_str, stderr_str)

        if stdout_str:
            logger.info(stdout_str.rstrip())
        if stderr_str:
            logger.info(stderr_str.rstrip())
        logger.debug("Exit code: %d", result.exit_code)

        if check and result.exit_code != 0:
            raise ProcessFailedError(str(executable), result.exit_code, stdout_str, stderr_str)
        return result


def _quote(part: str) -> str:
    """Quote a command-line part for display."""
    if not part or any(c.isspace() for c in part):
        return f'"{part}"'
    return part
