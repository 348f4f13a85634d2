"""
Custom exceptions for the modlock.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in modlock.io.
- Keep modlock.core as the source of truth for grammar/schema/codec errors (see
  modlock.core.errors).

Source of truth and boundaries
- modlock.core.errors.LockfileParseError is raised by the codec layer for recoverable
  decode failures; the reader wraps it in LockfileReadError with the file path.
- modlock.core.errors.LockfileCorruptionError (bad registry URL) and low-level shape
  errors are not wrapped; they propagate as-is.
- modlock.io raises:
  - LockfileConfigError: invalid or unsupported configuration.
  - LockfileReadError: the lockfile on disk is corrupt (bad JSON, bad tokens, schema).
  - LockfileWriteError: atomic write path failed (tmp write/fsync/rename).
  - LockfileOutOfDateError: the lockfile does not match the resolved graph in "error" mode.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "IoError",
    "LockfileConfigError",
    "LockfileReadError",
    "LockfileWriteError",
    "LockfileOutOfDateError",
]


class IoError(Exception):
    """
    Base class for IO-related errors in modlock.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from modlock.core errors.
    """


class LockfileConfigError(IoError):
    """
    Raised when lockfile configuration is invalid or unsupported.

    Examples:
        - Unknown lockfile mode
        - Empty set of allowed registry schemes
    """


class LockfileReadError(IoError):
    """
    Raised when the lockfile on disk cannot be decoded.

    Attributes:
        path (str): Lockfile path.

    Notes:
        The message names the file and keeps the underlying error text, which
        includes the offending raw string for token errors.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to read and parse the lockfile {path}: {reason}. "
            "Try deleting it and resolving again."
        )
        self.path = path


class LockfileWriteError(IoError):
    """
    Raised when a lockfile write fails to complete atomically.

    Notes:
        The write path is tmp file → fsync → os.replace(tmp, final). Failures at any
        step surface as LockfileWriteError (with best-effort cleanup of the tmp file).
    """


class LockfileOutOfDateError(IoError):
    """
    Raised in "error" mode when the lockfile differs from the resolved graph.

    Attributes:
        mismatches (list[str]): Wire names of the top-level fields that differ.
    """

    def __init__(self, path: str, mismatches: Sequence[str]) -> None:
        super().__init__(
            f"Lockfile {path} is out of date; mismatched fields: {', '.join(mismatches)}"
        )
        self.mismatches = list(mismatches)
