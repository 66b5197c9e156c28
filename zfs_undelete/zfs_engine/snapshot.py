"""Snapshots of a dataset and their enumeration."""

import os
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath
from typing import List, NamedTuple, Optional, Tuple

from ..errors import SnapshotAreaUnreadable, SnapshotEnumerationError
from ..utils.config import SNAPSHOT_SUBDIR
from ..utils.logger import UndeleteLogger


class FileVersionFingerprint(NamedTuple):
    """(mtime, size) used as a stand-in for content identity."""
    mtime_ns: int
    size: int


@dataclass(frozen=True)
class Snapshot:
    """A read-only snapshot directory, `<dataset root>/.zfs/snapshot/<name>`."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def join(self, relative_path: PurePath) -> Path:
        return self.path / relative_path

    def contains_file(self, relative_path: PurePath) -> Optional[Path]:
        """Return the full path of the file in this snapshot if it exists there."""
        candidate = self.join(relative_path)
        # lexists: a symlink is restorable even if its target is gone
        if os.path.lexists(candidate):
            return candidate
        return None

    def fingerprint(self, relative_path: PurePath) -> FileVersionFingerprint:
        """
        Read mtime and size of the file from its parent directory entry.

        The symlink itself is examined, not its target.

        Args:
            relative_path: Path relative to the dataset root

        Returns:
            Fingerprint of this snapshot's copy

        Raises:
            FileNotFoundError: If the file is not in this snapshot
            OSError: If the directory or the entry cannot be read
        """
        full_path = self.join(relative_path)
        with os.scandir(full_path.parent) as entries:
            for entry in entries:
                if entry.name == full_path.name:
                    st = entry.stat(follow_symlinks=False)
                    return FileVersionFingerprint(st.st_mtime_ns, st.st_size)
        raise FileNotFoundError(f"{full_path} not found in snapshot {self.name}")

    def __str__(self):
        return str(self.path)


def sort_snapshots(snapshots) -> Tuple[Snapshot, ...]:
    """Order snapshots by the full path string, oldest first by naming convention."""
    return tuple(sorted(snapshots, key=lambda s: str(s.path)))


class SnapshotCatalog:
    """Lists the snapshots of a dataset."""

    def __init__(self, logger: UndeleteLogger, snapshot_dir: PurePath = SNAPSHOT_SUBDIR):
        """
        Initialize snapshot catalog.

        Args:
            logger: Logger instance
            snapshot_dir: Snapshot directory relative to the dataset root
        """
        self.logger = logger
        self.snapshot_dir = PurePosixPath(snapshot_dir)

    def snapshot_area(self, dataset_root: Path) -> Path:
        return Path(dataset_root) / self.snapshot_dir

    def snapshots_of(self, dataset_root: Path) -> Tuple[Snapshot, ...]:
        """
        Enumerate the snapshots of a dataset in ascending order.

        Every entry has to be readable. Silently dropping one could turn an
        older snapshot into the "newest" one.

        Args:
            dataset_root: Mountpoint of the dataset

        Returns:
            Tuple of Snapshot sorted ascending by path

        Raises:
            SnapshotAreaUnreadable: If the snapshot directory cannot be opened
            SnapshotEnumerationError: If any entry could not be read
        """
        area = self.snapshot_area(dataset_root)
        try:
            scanner = os.scandir(area)
        except OSError as e:
            raise SnapshotAreaUnreadable(f"Could not read ZFS snapshot dir {area}: {e}", area) from e

        snapshots: List[Snapshot] = []
        errors: List[OSError] = []
        with scanner:
            iterator = iter(scanner)
            while True:
                try:
                    entry = next(iterator)
                except StopIteration:
                    break
                except OSError as e:
                    errors.append(e)
                    break
                try:
                    entry.stat()
                except OSError as e:
                    errors.append(e)
                    continue
                snapshots.append(Snapshot(Path(entry.path)))

        if errors:
            raise SnapshotEnumerationError(area, errors)

        self.logger.debug(f"Found {len(snapshots)} snapshots in {area}")
        return sort_snapshots(snapshots)
