# recoder/rewrite.py

from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def safe_rewrite(path: Path, payload: bytes, mode: int) -> Path:
    """Replace the content of `path` with `payload`, keeping its permissions.

    The payload goes to a fresh scratch file in the same directory, which
    is then moved over the original with `os.replace`. The original is
    never truncated or partially written, and the scratch file is removed
    on every exit path.

    Args:
        path (Path): File to rewrite.
        payload (bytes): New content.
        mode (int): Permission bits to apply to the final file.

    Returns:
        Path: The rewritten path.

    Raises:
        OSError: If the scratch file cannot be written or moved into place.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            fd = None  # owned by f from here on
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        logger.debug("Rewrote %s (%d bytes, mode %o)", path, len(payload), mode)
        return path
    finally:
        if fd is not None:
            os.close(fd)
        if os.path.exists(tmp_name):
            try:
                os.unlink(tmp_name)
            except OSError as exc:
                logger.debug("Could not remove scratch file %s: %s", tmp_name, exc)
