"""Running external programs and capturing their output."""

import subprocess
from pathlib import PurePath
from typing import List, Sequence, Union

Argument = Union[str, PurePath]


def run_command(args: Sequence[Argument]) -> subprocess.CompletedProcess:
    """
    Run a program to completion and capture stdout and stderr as bytes.

    Args:
        args: Program name followed by its arguments

    Returns:
        CompletedProcess with returncode, stdout and stderr

    Raises:
        OSError: If the program cannot be started (e.g. not installed)
    """
    return subprocess.run([str(a) for a in args], stdout=subprocess.PIPE,
                          stderr=subprocess.PIPE, check=False)


def describe_failure(args: Sequence[Argument], result: subprocess.CompletedProcess) -> str:
    """Format a failed run for an error message."""
    stderr = result.stderr.decode('utf-8', errors='replace').strip() if result.stderr else ""
    command = ' '.join(str(a) for a in args)
    message = f"`{command}` exited with status {result.returncode}"
    if stderr:
        message += f": {stderr}"
    return message

