"""Dataset, snapshot and version lookup for ZFS."""

from .dataset import Dataset, DatasetResolver
from .mounts import MountCatalog, MountRecord
from .restorer import SnapshotRestorer
from .snapshot import FileVersionFingerprint, Snapshot, SnapshotCatalog
from .versions import FileVersion, VersionResolver

__all__ = [
    'Dataset', 'DatasetResolver', 'FileVersion', 'FileVersionFingerprint', 'MountCatalog',
    'MountRecord', 'Snapshot', 'SnapshotCatalog', 'SnapshotRestorer', 'VersionResolver',
]
