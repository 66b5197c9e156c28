"""Command line entry point."""

import argparse
import logging
import os
import sys
from pathlib import Path, PurePath
from typing import List, Optional, Tuple

from . import __version__
from .errors import RestoreError, UndeleteError
from .prompts import choose_version, user_wants_to_continue
from .utils.config import Config
from .utils.logger import UndeleteLogger
from .utils.platform_utils import normalize_path
from .zfs_engine import (Dataset, DatasetResolver, MountCatalog, SnapshotCatalog,
                         SnapshotRestorer, VersionResolver)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zfs-undelete",
        description="Restore a deleted file from the snapshots of its ZFS dataset.",
    )
    parser.add_argument('filename', help="path of the file to restore; it must not exist")
    parser.add_argument('-V', '--choose-version', action='store_true',
                        help="list the distinct versions of the file and choose one interactively")
    parser.add_argument('--gui', action='store_true',
                        help="choose the version in a window instead of the terminal")
    parser.add_argument('-y', '--yes', action='store_true',
                        help="restore the most recent version without asking")
    parser.add_argument('-n', '--dry-run', action='store_true',
                        help="show what would be restored without copying")
    parser.add_argument('-c', '--config', type=Path, default=None,
                        help="config file (default: $XDG_CONFIG_HOME/zfs-undelete.conf)")
    parser.add_argument('--log-file', type=Path, default=None, help="also write the log to this file")
    parser.add_argument('-v', '--verbose', action='store_true', help="log debug messages")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


class Undelete:
    """Wires the lookup components together and runs one restore."""

    def __init__(self, config: Config, logger: UndeleteLogger,
                 mount_catalog: Optional[MountCatalog] = None):
        self.config = config
        self.logger = logger
        self.mount_catalog = mount_catalog or MountCatalog(logger)
        self.snapshot_catalog = SnapshotCatalog(logger, snapshot_dir=config.snapshot_dir)
        self.resolver = DatasetResolver(self.mount_catalog, self.snapshot_catalog, logger)
        self.version_resolver = VersionResolver(logger, representative=config.representative)
        self.restorer = SnapshotRestorer(self.version_resolver, config, logger)

    def resolve(self, filename) -> Tuple[Dataset, PurePath]:
        target = normalize_path(filename)
        if os.path.lexists(target):
            raise RestoreError(f"Cannot restore already existing file: {target}", target)
        return self.resolver.resolve(target)

    def restore_most_recent(self, dataset: Dataset, relative_path: PurePath,
                            assume_yes: bool = False, dry_run: bool = False) -> Optional[Path]:
        confirm = (lambda source: True) if assume_yes else user_wants_to_continue
        return self.restorer.restore_most_recent(dataset, relative_path, confirm, dry_run=dry_run)

    def restore_chosen(self, dataset: Dataset, relative_path: PurePath, dry_run: bool = False) -> Path:
        versions = self.version_resolver.distinct_file_versions(dataset, relative_path)
        chosen = choose_version(
            versions, describe=lambda v: self.restorer.list_entry(v.snapshot.join(relative_path))
        )
        return self.restorer.restore_version(dataset, relative_path, chosen.snapshot, dry_run=dry_run)

    def restore_with_gui(self, dataset: Dataset, relative_path: PurePath, dry_run: bool = False) -> Optional[Path]:
        from PyQt5.QtWidgets import QApplication
        from .gui.version_window import VersionWindow

        versions = self.version_resolver.distinct_file_versions(dataset, relative_path)
        app = QApplication.instance() or QApplication(sys.argv)
        app.setApplicationName("zfs-undelete")
        window = VersionWindow(dataset, relative_path, versions, self.restorer, self.logger, dry_run=dry_run)
        window.show()
        app.exec_()
        return window.restored_path


def main(argv: Optional[List[str]] = None) -> int:
    """Restore the file named on the command line. Returns the exit status."""
    args = build_parser().parse_args(argv)
    logger = UndeleteLogger(log_file=args.log_file, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = Config.load(args.config)
        logger.debug(f"Using {config!r}")
        undelete = Undelete(config, logger)
        dataset, relative_path = undelete.resolve(args.filename)

        if args.gui:
            undelete.restore_with_gui(dataset, relative_path, dry_run=args.dry_run)
        elif args.choose_version:
            undelete.restore_chosen(dataset, relative_path, dry_run=args.dry_run)
        else:
            undelete.restore_most_recent(dataset, relative_path, assume_yes=args.yes, dry_run=args.dry_run)
    except UndeleteError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
