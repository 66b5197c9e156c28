"""Copies a file from a snapshot back into the live dataset."""

import os
import shlex
import shutil
import stat
from pathlib import Path, PurePath
from typing import Callable, Optional

from ..errors import RestoreError
from ..utils.commands import describe_failure, run_command
from ..utils.config import Config
from ..utils.logger import UndeleteLogger
from .dataset import Dataset
from .snapshot import Snapshot
from .versions import VersionResolver


class SnapshotRestorer:
    """Restores files from snapshots to their original location."""

    def __init__(self, version_resolver: VersionResolver, config: Config, logger: UndeleteLogger,
                 runner: Optional[Callable] = None):
        """
        Initialize snapshot restorer.

        Args:
            version_resolver: Finds the snapshot copies of a file
            config: User settings (listing command)
            logger: Logger instance
            runner: Callable running the listing command
        """
        self.version_resolver = version_resolver
        self.config = config
        self.logger = logger
        self.runner = runner or run_command

    def copy(self, source: Path, target: Path, dry_run: bool = False):
        """
        Copy `source` to `target` preserving timestamps, permissions and ownership.

        Symlinks are recreated rather than followed and directories are copied
        recursively.

        Args:
            source: Path inside a snapshot
            target: Restore location, must not exist
            dry_run: If True, only log what would be copied

        Raises:
            RestoreError: If the target exists or the copy fails
        """
        source = Path(source)
        target = Path(target)
        if os.path.lexists(target):
            raise RestoreError(f"Cannot restore already existing file: {target}", target)

        if dry_run:
            self.logger.info(f"[DRY RUN] Would copy: {source} -> {target}")
            return

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if source.is_symlink():
                os.symlink(os.readlink(source), target)
            elif source.is_dir():
                shutil.copytree(source, target, symlinks=True)
            else:
                shutil.copy2(source, target)
            self._copy_ownership(source, target)
        except OSError as e:
            raise RestoreError(f"Error copying {source} to {target}: {e}", target) from e

        self.logger.info(f"Restored: {target} (from {source})")

    def _chown_like(self, source: Path, target: Path):
        st = os.lstat(source)
        try:
            os.lchown(target, st.st_uid, st.st_gid)
        except PermissionError:
            # Only root may give files away
            if os.geteuid() == 0:
                raise
            self.logger.debug(f"Could not restore owner of {target}, keeping the current user")
            return
        # chown clears setuid/setgid bits, put the mode back
        if not stat.S_ISLNK(st.st_mode):
            os.chmod(target, stat.S_IMODE(st.st_mode))

    def _copy_ownership(self, source: Path, target: Path):
        """Give `target` and everything below it the owner and group of `source`."""
        self._chown_like(source, target)
        if source.is_symlink() or not source.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(source):
            relative = Path(dirpath).relative_to(source)
            # os.walk lists symlinks to directories under dirnames without descending
            for name in dirnames + filenames:
                self._chown_like(Path(dirpath) / name, target / relative / name)

    def list_entry(self, path: Path) -> str:
        """
        Describe a snapshot copy using the configured listing command.

        Args:
            path: Path of the file inside a snapshot

        Returns:
            Output of the listing command, empty if it failed
        """
        args = shlex.split(self.config.ls_command) + [str(path)]
        try:
            result = self.runner(args)
        except OSError as e:
            self.logger.warning(f"Could not run `{self.config.ls_command}`: {e}")
            return ""
        if result.returncode != 0:
            self.logger.warning(describe_failure(args, result))
            return ""
        return result.stdout.decode('utf-8', errors='replace').rstrip('\n')

    def restore_most_recent(self, dataset: Dataset, relative_path: PurePath,
                            confirm: Callable[[Path], bool], dry_run: bool = False) -> Optional[Path]:
        """
        Restore the copy from the newest snapshot holding the file.

        Args:
            dataset: Resolved dataset
            relative_path: Path relative to the dataset root
            confirm: Called with the snapshot copy, returns False to abort
            dry_run: If True, only log what would be copied

        Returns:
            The restored path, or None if the user declined
        """
        source = self.version_resolver.newest_containing(dataset, relative_path)
        if not confirm(source):
            self.logger.info("Restore declined")
            return None
        target = dataset.get_absolute_path(relative_path)
        self.copy(source, target, dry_run=dry_run)
        return target

    def restore_version(self, dataset: Dataset, relative_path: PurePath, snapshot: Snapshot,
                        dry_run: bool = False) -> Path:
        """
        Restore the copy of the file held by `snapshot`.

        Raises:
            RestoreError: If the snapshot does not hold the file or the copy fails
        """
        source = snapshot.contains_file(relative_path)
        if source is None:
            raise RestoreError(f"Snapshot {snapshot.name} does not contain {relative_path}",
                               snapshot.join(relative_path))
        target = dataset.get_absolute_path(relative_path)
        self.copy(source, target, dry_run=dry_run)
        return target
