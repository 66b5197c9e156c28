"""Shared fixtures: fake datasets with `.zfs/snapshot` trees."""

import os
import subprocess
from pathlib import Path

import pytest

from zfs_undelete.utils.logger import UndeleteLogger


@pytest.fixture
def logger():
    """Create a logger instance."""
    return UndeleteLogger(log_to_file=False)


def write_file(path: Path, content: str, mtime: int = None) -> Path:
    """Write `content` to `path`, creating parents, and optionally pin its mtime in seconds."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def make_snapshot(dataset_root: Path, name: str) -> Path:
    """Create an empty snapshot directory below the dataset root."""
    snapshot = dataset_root / ".zfs" / "snapshot" / name
    snapshot.mkdir(parents=True)
    return snapshot


def zfs_list_runner(output: str, returncode: int = 0, stderr: bytes = b""):
    """Build a command runner returning canned `zfs list` output."""
    calls = []

    def runner(args):
        calls.append(list(args))
        return subprocess.CompletedProcess(args, returncode, stdout=output.encode('utf-8'), stderr=stderr)

    runner.calls = calls
    return runner
