"""Finding the snapshots that hold a file and its distinct versions."""

from pathlib import Path, PurePath
from typing import List, NamedTuple, Set

from ..errors import InvalidArgument, NotFoundInAnySnapshot
from ..utils.config import DEFAULT_REPRESENTATIVE, REPRESENTATIVES
from ..utils.logger import UndeleteLogger
from .dataset import Dataset
from .snapshot import FileVersionFingerprint, Snapshot


class FileVersion(NamedTuple):
    """A snapshot holding one distinct version of a file."""
    snapshot: Snapshot
    fingerprint: FileVersionFingerprint


def _check_relative(relative_path: PurePath):
    if PurePath(relative_path).is_absolute():
        raise InvalidArgument(f"Path must be relative, not absolute: {relative_path}", relative_path)


class VersionResolver:
    """Looks up a file across the snapshots of its dataset."""

    def __init__(self, logger: UndeleteLogger, representative: str = DEFAULT_REPRESENTATIVE):
        """
        Initialize version resolver.

        Args:
            logger: Logger instance
            representative: Which snapshot of a run with identical fingerprints
                is kept, "oldest" or "newest"
        """
        if representative not in REPRESENTATIVES:
            raise InvalidArgument(f"Unknown version representative: {representative}")
        self.logger = logger
        self.representative = representative

    def newest_containing(self, dataset: Dataset, relative_path: PurePath) -> Path:
        """
        Find the newest snapshot that contains the file.

        Args:
            dataset: Resolved dataset
            relative_path: Path relative to the dataset root

        Returns:
            Full path of the file inside the newest snapshot holding it

        Raises:
            InvalidArgument: If `relative_path` is absolute
            NotFoundInAnySnapshot: If no snapshot has the file
        """
        _check_relative(relative_path)
        for snapshot in reversed(dataset.snapshots):
            found = snapshot.contains_file(relative_path)
            if found is not None:
                self.logger.info(f"Newest copy of {relative_path} is in snapshot {snapshot.name}")
                return found
        raise NotFoundInAnySnapshot(dataset.get_absolute_path(relative_path))

    def distinct_file_versions(self, dataset: Dataset, relative_path: PurePath) -> List[FileVersion]:
        """
        Collapse the snapshots holding the file into distinct versions, newest first.

        Snapshots where the file is missing or unreadable are skipped. Of several
        snapshots sharing a fingerprint only one is kept, the oldest by default.

        Args:
            dataset: Resolved dataset
            relative_path: Path relative to the dataset root

        Returns:
            List of FileVersion, newest version first

        Raises:
            InvalidArgument: If `relative_path` is absolute
            NotFoundInAnySnapshot: If no snapshot has the file
        """
        _check_relative(relative_path)

        present: List[FileVersion] = []
        for snapshot in dataset.snapshots:
            try:
                fingerprint = snapshot.fingerprint(relative_path)
            except FileNotFoundError:
                continue
            except OSError as e:
                self.logger.warning(f"Skipping snapshot {snapshot.name}: {e}")
                continue
            present.append(FileVersion(snapshot, fingerprint))

        if not present:
            raise NotFoundInAnySnapshot(dataset.get_absolute_path(relative_path))

        scan_order = present if self.representative == "oldest" else list(reversed(present))
        seen: Set[FileVersionFingerprint] = set()
        kept: List[FileVersion] = []
        for version in scan_order:
            if version.fingerprint not in seen:
                seen.add(version.fingerprint)
                kept.append(version)

        if self.representative == "oldest":
            kept.reverse()

        self.logger.info(
            f"{relative_path}: {len(kept)} distinct version(s) in {len(present)} of "
            f"{len(dataset.snapshots)} snapshot(s)"
        )
        return kept

    def distinct_versions(self, dataset: Dataset, relative_path: PurePath) -> List[Snapshot]:
        """Snapshots holding distinct versions of the file, newest first."""
        return [v.snapshot for v in self.distinct_file_versions(dataset, relative_path)]
