# recoder/walk.py

from __future__ import annotations
import os
from pathlib import Path
from typing import Iterator


def iter_files(root: Path) -> Iterator[Path]:
    """Iterate over all regular files under a directory, recursively.

    Symlinks are neither followed nor reported.

    Args:
        root (Path): Directory to scan.

    Yields:
        Path: Paths to each regular file found.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            p = Path(dirpath) / name
            if p.is_file() and not p.is_symlink():
                yield p
