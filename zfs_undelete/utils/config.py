"""Global settings, constants, paths and the key/value config file."""

import os
import platform
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

from ..errors import ConfigError

# Snapshots of a dataset are exposed below its mountpoint
SNAPSHOT_SUBDIR = PurePosixPath(".zfs") / "snapshot"

# name, mountpoint and mount status of every filesystem dataset, tab separated, no header
ZFS_LIST_COMMAND = ["zfs", "list", "-t", "filesystem", "-H", "-o", "name,mountpoint,mounted"]

# Data directory for log files
xdg_data = os.environ.get('XDG_DATA_HOME')
if xdg_data:
    DATA_DIR = Path(xdg_data) / "zfs-undelete"
else:
    DATA_DIR = Path.home() / ".local" / "share" / "zfs-undelete"

LOG_DIR = DATA_DIR / "logs"

CONFIG_FILE_NAME = "zfs-undelete.conf"

DEFAULT_LS_COMMAND = "ls -l"
DEFAULT_REPRESENTATIVE = "oldest"
REPRESENTATIVES = ("oldest", "newest")

# Platform information for logging
PLATFORM_NAME = platform.system()
PLATFORM_VERSION = platform.release()


def get_config_file() -> Path:
    """Return `$XDG_CONFIG_HOME/zfs-undelete.conf`, falling back to `~/.config`."""
    xdg_config = os.environ.get('XDG_CONFIG_HOME')
    if xdg_config:
        return Path(xdg_config) / CONFIG_FILE_NAME
    return Path.home() / ".config" / CONFIG_FILE_NAME


def parse_config_text(text: str, source: str = "<config>") -> Dict[str, str]:
    """
    Parse `key = value` lines.

    Everything after a `#` is a comment. Lines without `=` are ignored.

    Args:
        text: Content of the config file
        source: Name used in error messages

    Returns:
        Dict mapping keys to values, both stripped

    Raises:
        ConfigError: If a key appears twice or is empty
    """
    pairs: Dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        before_comment = line.split('#', 1)[0].strip()
        if not before_comment or '=' not in before_comment:
            continue

        key, value = before_comment.split('=', 1)
        key = key.strip()
        if not key:
            raise ConfigError(f"{source}:{line_number}: missing key in '{before_comment}'")
        if key in pairs:
            raise ConfigError(f"{source}:{line_number}: duplicate key in config: {key}")
        pairs[key] = value.strip()
    return pairs


class Config:
    """User settings read from the config file."""

    def __init__(self, ls_command: str = DEFAULT_LS_COMMAND,
                 representative: str = DEFAULT_REPRESENTATIVE,
                 snapshot_dir: PurePosixPath = SNAPSHOT_SUBDIR):
        self.ls_command = ls_command
        self.representative = representative
        self.snapshot_dir = PurePosixPath(snapshot_dir)
        self._sanity_check()

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "Config":
        """
        Load the config file from disk.

        A missing file is not an error, the defaults are used instead.

        Args:
            config_file: Path of the file (defaults to `get_config_file()`)

        Returns:
            Config instance

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        config_file = Path(config_file) if config_file else get_config_file()
        if not config_file.exists():
            return cls()

        try:
            text = config_file.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read config file {config_file}: {e}") from e

        pairs = parse_config_text(text, source=str(config_file))
        return cls(
            ls_command=pairs.get("LsCommand", DEFAULT_LS_COMMAND),
            representative=pairs.get("VersionRepresentative", DEFAULT_REPRESENTATIVE),
            snapshot_dir=PurePosixPath(pairs.get("SnapshotDir", str(SNAPSHOT_SUBDIR))),
        )

    def _sanity_check(self):
        if not self.ls_command.strip():
            raise ConfigError("missing value for LsCommand")
        if self.representative not in REPRESENTATIVES:
            raise ConfigError(
                f"VersionRepresentative must be one of {', '.join(REPRESENTATIVES)}, "
                f"got '{self.representative}'"
            )
        if self.snapshot_dir.is_absolute() or '..' in self.snapshot_dir.parts:
            raise ConfigError(f"SnapshotDir must be a relative path below the dataset root: {self.snapshot_dir}")

    def __repr__(self):
        return (f"Config(ls_command={self.ls_command!r}, representative={self.representative!r}, "
                f"snapshot_dir={str(self.snapshot_dir)!r})")
