"""Discovery of mounted ZFS datasets through `zfs list`."""

import subprocess
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Sequence, Set

from ..errors import QueryError
from ..utils.commands import describe_failure, run_command
from ..utils.config import ZFS_LIST_COMMAND
from ..utils.logger import UndeleteLogger

CommandRunner = Callable[[Sequence[str]], subprocess.CompletedProcess]


class MountRecord(NamedTuple):
    """One line of `zfs list -H -o name,mountpoint,mounted`."""
    name: str
    mountpoint: str
    mounted: bool


def parse_zfs_list_output(output: str) -> List[MountRecord]:
    """
    Parse tab separated `name mountpoint mounted` lines.

    Args:
        output: Decoded stdout of `zfs list`

    Returns:
        List of records in output order

    Raises:
        QueryError: If a line has fewer than three columns
    """
    records = []
    for line in output.splitlines():
        if not line.strip():
            continue
        columns = line.split('\t')
        if len(columns) < 3:
            raise QueryError(f"Unexpected line in `zfs list` output: {line!r}")
        records.append(MountRecord(columns[0], columns[1], 'yes' in columns[2]))
    return records


class MountCatalog:
    """Queries ZFS for the mountpoints of mounted datasets."""

    def __init__(self, logger: UndeleteLogger, runner: Optional[CommandRunner] = None,
                 command: Sequence[str] = tuple(ZFS_LIST_COMMAND)):
        """
        Initialize mount catalog.

        Args:
            logger: Logger instance
            runner: Callable running a command and returning a CompletedProcess
            command: The `zfs list` invocation
        """
        self.logger = logger
        self.runner = runner or run_command
        self.command = list(command)

    def _run_query(self) -> str:
        try:
            result = self.runner(self.command)
        except OSError as e:
            raise QueryError(f"Could not run `{' '.join(self.command)}`: {e}") from e

        if result.returncode != 0:
            raise QueryError(describe_failure(self.command, result))

        try:
            return result.stdout.decode('utf-8')
        except UnicodeDecodeError as e:
            raise QueryError(f"`{' '.join(self.command)}` returned invalid UTF-8") from e

    def list_records(self) -> List[MountRecord]:
        """Return every filesystem dataset, mounted or not."""
        return parse_zfs_list_output(self._run_query())

    def list_mounted_dataset_roots(self) -> Set[Path]:
        """
        Get the mountpoints of all currently mounted datasets.

        Returns:
            Set of absolute mountpoint paths

        Raises:
            QueryError: If the query fails or its output is undecodable
        """
        records = self.list_records()
        roots = {Path(r.mountpoint) for r in records if r.mounted}
        self.logger.debug(f"{len(roots)} of {len(records)} datasets are mounted")
        return roots
