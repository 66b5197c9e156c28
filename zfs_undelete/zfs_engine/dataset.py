"""Finding the dataset that owns a path."""

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Optional, Set, Tuple

from ..errors import InvalidArgument, NotUnderManagedFilesystem, PathNotRelated
from ..utils.logger import UndeleteLogger
from ..utils.platform_utils import normalize_path
from .mounts import MountCatalog
from .snapshot import Snapshot, SnapshotCatalog


@dataclass(frozen=True)
class Dataset:
    """A mounted dataset and its snapshots, oldest first."""

    root: Path
    snapshots: Tuple[Snapshot, ...] = ()

    def get_absolute_path(self, relative_path: PurePath) -> Path:
        """Location of `relative_path` in the live dataset, i.e. the restore target."""
        if PurePath(relative_path).is_absolute():
            raise InvalidArgument(f"Path must be relative to the dataset root: {relative_path}", relative_path)
        return self.root / relative_path


def relative_path_within(root: PurePath, path: PurePath) -> PurePath:
    """
    Strip `root` from the front of `path`, component by component.

    Args:
        root: Dataset root
        path: Absolute path below `root`

    Returns:
        The remaining components of `path` as a relative path

    Raises:
        PathNotRelated: If a component of `root` differs from `path`
    """
    root_parts = PurePath(root).parts
    path_parts = PurePath(path).parts
    if len(root_parts) > len(path_parts):
        raise PathNotRelated(path, root)

    for root_part, path_part in zip(root_parts, path_parts):
        if root_part != path_part:
            raise PathNotRelated(path, root)

    return PurePath(*path_parts[len(root_parts):])


def closest_mounted_ancestor(path: Path, mounted_roots: Iterable[PurePath]) -> Optional[Path]:
    """Return the closest ancestor of `path` (or `path` itself) that is a mounted root."""
    roots = {Path(r) for r in mounted_roots}
    for candidate in (path, *path.parents):
        if candidate in roots:
            return candidate
    return None


class DatasetResolver:
    """Maps absolute paths to their dataset and relative path."""

    def __init__(self, mount_catalog: MountCatalog, snapshot_catalog: SnapshotCatalog,
                 logger: UndeleteLogger):
        """
        Initialize dataset resolver.

        Args:
            mount_catalog: Source of mounted dataset roots
            snapshot_catalog: Used to load the snapshots of the resolved dataset
            logger: Logger instance
        """
        self.mount_catalog = mount_catalog
        self.snapshot_catalog = snapshot_catalog
        self.logger = logger

    def find_root(self, path, mounted_roots: Optional[Set[Path]] = None) -> Tuple[Path, PurePath]:
        """
        Find the innermost mounted dataset containing `path`.

        Args:
            path: Path of the file, made absolute lexically
            mounted_roots: Mountpoints to search (queried from ZFS if None)

        Returns:
            Tuple of (dataset root, path relative to the root)

        Raises:
            QueryError: If `zfs list` fails
            NotUnderManagedFilesystem: If no ancestor is a mounted dataset
            PathNotRelated: If the relative path cannot be computed
        """
        absolute = normalize_path(path)
        if mounted_roots is None:
            mounted_roots = self.mount_catalog.list_mounted_dataset_roots()

        root = closest_mounted_ancestor(absolute, mounted_roots)
        if root is None:
            raise NotUnderManagedFilesystem(absolute)

        return root, relative_path_within(root, absolute)

    def resolve(self, path) -> Tuple[Dataset, PurePath]:
        """
        Resolve `path` to its dataset (with snapshots) and relative path.

        Args:
            path: Path of the file to restore

        Returns:
            Tuple of (Dataset, relative path)

        Raises:
            QueryError, NotUnderManagedFilesystem, PathNotRelated,
            SnapshotAreaUnreadable, SnapshotEnumerationError
        """
        root, relative_path = self.find_root(path)
        self.logger.info(f"{path} belongs to dataset mounted at {root}")
        snapshots = self.snapshot_catalog.snapshots_of(root)
        return Dataset(root, snapshots), relative_path
