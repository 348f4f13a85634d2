"""
Filesystem helpers for modlock.io.

Responsibilities
- Provide a minimal stdlib-only abstraction for the filesystem operations used by the
  lockfile reader/writer: existence checks, text reads, and the atomic write path.
- Establish clear semantics for the atomic write path: tmp write → fsync → atomic rename.

Notes
- Atomicity via os.replace is guaranteed only when src and dst reside on the same filesystem;
  the tmp file is always created next to its destination.
- All helpers are synchronous; callers decide on concurrency/locking if/when needed.
"""

from __future__ import annotations

import os
import uuid


def exists(path: str) -> bool:
    """Check whether a path exists."""
    return os.path.exists(path)


def read_text(path: str) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If path does not exist.
    """
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def makedirs(path: str, exist_ok: bool = True) -> None:
    """Create directories recursively (no-op for the empty path)."""
    if path:
        os.makedirs(path, exist_ok=exist_ok)


def write_text_atomic(path: str, text: str) -> None:
    """
    Write text to path via tmp file → fsync → os.replace.

    Args:
        path (str): Final destination path.
        text (str): UTF-8 text to write.

    Raises:
        OSError: On any failure; the tmp file is removed on a best-effort basis.
    """
    directory = os.path.dirname(os.path.abspath(path))
    makedirs(directory)
    tmp = os.path.join(directory, f".{os.path.basename(path)}.{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp, "wb") as fh:
            fh.write(text.encode("utf-8"))
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except OSError:
        try:
            os.remove(tmp)
        except FileNotFoundError:
            pass
        raise
