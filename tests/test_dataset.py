"""Tests for resolving paths to datasets."""

import shutil
import tempfile
from pathlib import Path, PurePath

import pytest

from zfs_undelete.errors import InvalidArgument, NotUnderManagedFilesystem, PathNotRelated
from zfs_undelete.zfs_engine.dataset import (Dataset, DatasetResolver, closest_mounted_ancestor,
                                             relative_path_within)
from zfs_undelete.zfs_engine.mounts import MountCatalog
from zfs_undelete.zfs_engine.snapshot import SnapshotCatalog
from conftest import make_snapshot, zfs_list_runner


class CountingSnapshotCatalog(SnapshotCatalog):
    """Snapshot catalog recording the roots it was asked about."""

    def __init__(self, logger):
        super().__init__(logger)
        self.requested = []

    def snapshots_of(self, dataset_root):
        self.requested.append(dataset_root)
        return super().snapshots_of(dataset_root)


@pytest.fixture
def temp_root():
    """Create a temporary directory acting as a dataset mountpoint."""
    root = Path(tempfile.mkdtemp())
    yield root
    shutil.rmtree(root, ignore_errors=True)


def make_resolver(logger, zfs_list_output):
    mount_catalog = MountCatalog(logger, runner=zfs_list_runner(zfs_list_output))
    snapshot_catalog = CountingSnapshotCatalog(logger)
    return DatasetResolver(mount_catalog, snapshot_catalog, logger)


def test_make_path_relative():
    """Test stripping the dataset root."""
    assert relative_path_within(PurePath("/a"), PurePath("/a/b/c")) == PurePath("b/c")
    assert relative_path_within(PurePath("/"), PurePath("/a/b/c")) == PurePath("a/b/c")
    assert relative_path_within(PurePath("/a/b"), PurePath("/a/b/c")) == PurePath("c")


def test_relative_path_unrelated():
    """Test that a path outside the root is rejected."""
    with pytest.raises(PathNotRelated):
        relative_path_within(PurePath("/a/b"), PurePath("/a/bc/d"))
    with pytest.raises(PathNotRelated):
        relative_path_within(PurePath("/a/b/c"), PurePath("/a/b"))


def test_nested_datasets_choose_innermost():
    """Test that the closest mounted ancestor wins."""
    roots = {Path("/a"), Path("/a/b")}
    assert closest_mounted_ancestor(Path("/a/b/c"), roots) == Path("/a/b")
    assert closest_mounted_ancestor(Path("/a/x/c"), roots) == Path("/a")


def test_no_mounted_ancestor():
    """Test that None is returned when nothing matches."""
    assert closest_mounted_ancestor(Path("/srv/file"), {Path("/tank")}) is None


def test_find_root_normalizes_path(logger):
    """Test that `..` components are collapsed before matching."""
    resolver = make_resolver(logger, "tank\t/tank\tyes\n")

    root, relative = resolver.find_root("/tank/x/../docs/file.txt")

    assert root == Path("/tank")
    assert relative == PurePath("docs/file.txt")
    assert root / relative == Path("/tank/docs/file.txt")


def test_find_root_ignores_unmounted(logger):
    """Test that unmounted datasets are not matched."""
    resolver = make_resolver(logger, "tank\t/tank\tyes\ntank/home\t/tank/home\tno\n")

    root, relative = resolver.find_root("/tank/home/user/file")

    assert root == Path("/tank")
    assert relative == PurePath("home/user/file")


def test_resolve_not_under_zfs_does_no_snapshot_io(logger):
    """Test that an unmanaged path fails before any snapshot listing."""
    resolver = make_resolver(logger, "tank\t/tank\tyes\n")

    with pytest.raises(NotUnderManagedFilesystem):
        resolver.resolve("/srv/data/file.txt")
    assert resolver.snapshot_catalog.requested == []


def test_resolve_loads_snapshots(logger, temp_root):
    """Test that resolve returns the dataset with its sorted snapshots."""
    make_snapshot(temp_root, "2024-02-01")
    make_snapshot(temp_root, "2024-01-01")
    resolver = make_resolver(logger, f"pool/data\t{temp_root}\tyes\n")

    dataset, relative = resolver.resolve(temp_root / "docs" / "report.txt")

    assert dataset.root == temp_root
    assert relative == PurePath("docs/report.txt")
    assert [s.name for s in dataset.snapshots] == ["2024-01-01", "2024-02-01"]
    assert dataset.get_absolute_path(relative) == temp_root / "docs" / "report.txt"


def test_resolve_is_idempotent(logger, temp_root):
    """Test that resolving twice yields identical results."""
    make_snapshot(temp_root, "snap1")
    resolver = make_resolver(logger, f"pool/data\t{temp_root}\tyes\n")

    first = resolver.resolve(temp_root / "a" / "b")
    second = resolver.resolve(temp_root / "a" / "b")

    assert first == second


def test_get_absolute_path_rejects_absolute():
    """Test that the restore target needs a relative path."""
    dataset = Dataset(Path("/tank"))
    with pytest.raises(InvalidArgument):
        dataset.get_absolute_path(PurePath("/etc/passwd"))
