"""Runs external programs in subprocesses and captures their output."""

import logging
import shlex
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, Sequence

logger = logging.getLogger(__name__)


class ExecutionFailed(Exception):
    """Raised when a command exits with a non-zero status."""

    def __init__(self, command: str, status: int, stdout: str = "", stderr: str = ""):
        super().__init__(f"`{command}` failed with status {status}")
        self.command = command
        self.status = status
        self.stdout = stdout
        self.stderr = stderr


def _record(stream: IO[str], record: list[str], echo_to: IO[str] | None) -> None:
    for line in iter(stream.readline, ""):
        record.append(line)
        if echo_to is not None:
            echo_to.write(line)
            echo_to.flush()
    stream.close()


def run(
    args: Sequence[str | Path],
    echo: bool = False,
    fail_on_error: bool = True,
    cwd: Path | None = None,
) -> str:
    """
    Runs an executable and returns its standard output.

    Args:
        args: The argument vector. The first element is the executable.
        echo: Whether to copy the program's output and error streams to ours while it runs.
        fail_on_error: Whether a non-zero exit status raises ExecutionFailed.
        cwd: The working directory for the subprocess.

    Returns:
        The captured standard output, whatever the exit status when fail_on_error is False.

    Raises:
        ExecutionFailed: If the program exits with a non-zero status and fail_on_error is True.
    """
    argv = [str(arg) for arg in args]
    command = shlex.join(argv)
    logger.debug(f"running `{command}`")

    process = subprocess.Popen(
        argv,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )

    out_record: list[str] = []
    err_record: list[str] = []
    # Both pipes are drained concurrently so a chatty stderr cannot block stdout.
    readers = [
        threading.Thread(target=_record, args=(process.stdout, out_record, sys.stdout if echo else None)),
        threading.Thread(target=_record, args=(process.stderr, err_record, sys.stderr if echo else None)),
    ]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    status = process.wait()

    stdout = "".join(out_record)
    stderr = "".join(err_record)
    logger.debug(f"`{command}` exited with status {status}")

    if status != 0 and fail_on_error:
        logger.error(f"`{command}` failed, status {status}")
        logger.error("standard output follows")
        logger.error(stdout)
        logger.error("standard error follows")
        logger.error(stderr)
        raise ExecutionFailed(command, status, stdout, stderr)

    return stdout
