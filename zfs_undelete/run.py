#!/usr/bin/env python3
"""Simple launcher script for zfs-undelete."""

import sys
from pathlib import Path

# Add the parent directory to the path so we can import zfs_undelete
sys.path.insert(0, str(Path(__file__).parent.parent))

from zfs_undelete.app import main

if __name__ == "__main__":
    sys.exit(main())
