"""Terminal prompts for the restore flows."""

from pathlib import Path
from typing import Callable, List, Optional, TextIO
import sys

from .errors import RestoreError
from .utils.platform_utils import format_mtime, format_size
from .zfs_engine.versions import FileVersion


def user_wants_to_continue(source: Path, stdin: Optional[TextIO] = None,
                           stdout: Optional[TextIO] = None) -> bool:
    """Show the snapshot copy and ask `Restore file? [y/N]`."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stdout.write(f"found file:\n{source}\n")
    stdout.write("Restore file? [y/N] ")
    stdout.flush()
    answer = stdin.readline().strip().lower()
    return answer in ('y', 'yes')


def format_version(index: int, version: FileVersion, listing: str = "") -> str:
    """One line per version, `i: <snapshot>, <size>, <mtime>` plus the listing output."""
    line = (f"{index}: {version.snapshot}, {format_size(version.fingerprint.size)}, "
            f"{format_mtime(version.fingerprint.mtime_ns)}")
    if listing:
        line += "\n" + "\n".join("    " + row for row in listing.splitlines())
    return line


def choose_version(versions: List[FileVersion], describe: Optional[Callable[[FileVersion], str]] = None,
                   stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> FileVersion:
    """
    List the versions and read the index of the one to restore.

    Args:
        versions: Distinct versions, newest first
        describe: Returns extra listing text for a version
        stdin: Input stream (defaults to sys.stdin)
        stdout: Output stream (defaults to sys.stdout)

    Returns:
        The chosen version

    Raises:
        RestoreError: If the answer is not a valid index
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    for index, version in enumerate(versions):
        listing = describe(version) if describe else ""
        stdout.write(format_version(index, version, listing) + "\n")
    stdout.write(f"choose [0-{len(versions) - 1}]: ")
    stdout.flush()

    answer = stdin.readline().strip()
    try:
        choice = int(answer)
    except ValueError as e:
        raise RestoreError(f"Invalid answer: {answer!r}") from e
    if not 0 <= choice < len(versions):
        raise RestoreError(f"Invalid answer: {choice} is not in [0-{len(versions) - 1}]")
    return versions[choice]
