"""Restore deleted or overwritten files from ZFS snapshots."""

__version__ = "1.0.0"
