"""Exceptions raised while locating and restoring files from ZFS snapshots."""

from pathlib import PurePath
from typing import List, Optional, Union

PathLike = Union[str, PurePath]


class UndeleteError(Exception):
    """Base class for every error the tool reports to the user."""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.path = path
        super().__init__(message)


class ConfigError(UndeleteError):
    """Raised when the config file cannot be read or holds invalid values."""


class QueryError(UndeleteError):
    """Raised when `zfs list` cannot be run or its output cannot be decoded."""


class NotUnderManagedFilesystem(UndeleteError):
    """Raised when no ancestor of a path is the mountpoint of a mounted dataset."""

    def __init__(self, path: PathLike):
        super().__init__(f"File does not reside under any mounted ZFS dataset: {path}", path)


class PathNotRelated(UndeleteError):
    """Raised when a path does not lie below the dataset root it was matched to.

    Attributes:
        root: The dataset root the path was compared against.
    """

    def __init__(self, path: PathLike, root: PathLike):
        self.root = root
        super().__init__(f"Paths are not related: {path} is not below {root}", path)


class SnapshotAreaUnreadable(UndeleteError):
    """Raised when the snapshot directory of a dataset cannot be listed."""


class SnapshotEnumerationError(UndeleteError):
    """Raised when some entries of the snapshot directory could not be read.

    Attributes:
        errors: Every per-entry error collected during the listing.
    """

    def __init__(self, path: PathLike, errors: List[OSError]):
        self.errors = errors
        details = "; ".join(str(e) for e in errors)
        super().__init__(
            f"Aggregation of snapshots under {path} failed, {len(errors)} error(s): {details}", path
        )


class InvalidArgument(UndeleteError, ValueError):
    """Raised on programming errors such as an absolute path where a relative one is expected."""


class NotFoundInAnySnapshot(UndeleteError):
    """Raised when a file exists in none of the snapshots of its dataset."""

    def __init__(self, path: PathLike):
        super().__init__(f"File does not exist in any snapshot: {path}", path)


class RestoreError(UndeleteError):
    """Raised when a snapshot copy cannot be restored to its original location."""
