"""
Lockfile reader/writer.

Reads and writes ModuleLockfile documents through the codec registry assembled for
the caller's registry factory.

Error policy
- Recoverable decode failures (bad JSON, LockfileParseError from the codecs,
  pydantic.ValidationError from the schema) are reported as LockfileReadError naming
  the file; the underlying message (with the offending raw string) is kept and the
  original exception is chained.
- LockfileCorruptionError (a registry URL the factory rejects) and low-level shape
  errors (a module key without "@") propagate unchanged.
- Write failures are reported as LockfileWriteError.

Examples:
    >>> from modlock.core import CachingRegistryFactory
    >>> from modlock.io.lockfile import read_lockfile
    >>> read_lockfile("does-not-exist.lock", CachingRegistryFactory()) is None
    True
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from modlock.codecs.lockfile import assemble_lockfile_codec
from modlock.core.errors import LockfileParseError
from modlock.core.registry import RegistryFactory
from modlock.core.schema import ModuleLockfile
from modlock.core.serde import json_dumps_canonical

from .config import LockfileSettings
from .errors import LockfileOutOfDateError, LockfileReadError, LockfileWriteError
from .fs import exists, read_text, write_text_atomic

__all__ = [
    "loads_lockfile",
    "dumps_lockfile",
    "read_lockfile",
    "write_lockfile",
    "lockfile_mismatches",
    "update_lockfile",
]

logger = logging.getLogger(__name__)


def loads_lockfile(
    text: str, registry_factory: RegistryFactory, path: str = "<string>"
) -> ModuleLockfile:
    """
    Decode lockfile text.

    Args:
        text (str): Lockfile JSON.
        registry_factory (RegistryFactory): Factory used to resolve registry URLs.
        path (str): Name used in error messages.

    Raises:
        LockfileReadError: If the text is not a valid lockfile document.
        LockfileCorruptionError: If a registry URL is not a valid URI.
    """
    codec = assemble_lockfile_codec(registry_factory)
    try:
        return codec.loads(text, ModuleLockfile)
    except json.JSONDecodeError as exc:
        raise LockfileReadError(path, f"invalid JSON ({exc})") from exc
    except LockfileParseError as exc:
        raise LockfileReadError(path, str(exc)) from exc
    except ValidationError as exc:
        raise LockfileReadError(path, str(exc)) from exc


def dumps_lockfile(
    lockfile: ModuleLockfile, registry_factory: RegistryFactory, indent: int = 2
) -> str:
    """Encode a lockfile document in the on-disk JSON layout."""
    codec = assemble_lockfile_codec(registry_factory)
    return codec.dumps(lockfile, ModuleLockfile, indent=indent)


def read_lockfile(path: str, registry_factory: RegistryFactory) -> ModuleLockfile | None:
    """
    Read the lockfile at path.

    Returns:
        ModuleLockfile | None: The document, or None if the file does not exist.

    Raises:
        LockfileReadError: If the file exists but cannot be decoded.
    """
    if not exists(path):
        logger.debug("no lockfile at %s", path)
        return None
    try:
        text = read_text(path)
    except UnicodeDecodeError as exc:
        raise LockfileReadError(path, f"not valid UTF-8 ({exc})") from exc
    return loads_lockfile(text, registry_factory, path=path)


def write_lockfile(
    path: str, lockfile: ModuleLockfile, registry_factory: RegistryFactory, indent: int = 2
) -> None:
    """
    Atomically write lockfile to path.

    Raises:
        LockfileWriteError: If the tmp write, fsync or rename fails.
    """
    text = dumps_lockfile(lockfile, registry_factory, indent=indent)
    try:
        write_text_atomic(path, text)
    except OSError as exc:
        raise LockfileWriteError(f"failed to write lockfile {path}: {exc}") from exc
    logger.info("wrote lockfile %s (%d modules)", path, len(lockfile.module_dep_graph))


def lockfile_mismatches(
    old: ModuleLockfile, new: ModuleLockfile, registry_factory: RegistryFactory
) -> list[str]:
    """
    List the top-level fields (wire names) whose encoded values differ.

    Values are compared in canonical JSON, so mapping order does not count as a
    difference.
    """
    codec = assemble_lockfile_codec(registry_factory)
    old_doc = codec.encode(old, ModuleLockfile)
    new_doc = codec.encode(new, ModuleLockfile)
    out: list[str] = []
    for name, info in ModuleLockfile.model_fields.items():
        key = info.alias or name
        if json_dumps_canonical(old_doc.get(key)) != json_dumps_canonical(new_doc.get(key)):
            out.append(key)
    return out


def update_lockfile(
    settings: LockfileSettings, lockfile: ModuleLockfile, registry_factory: RegistryFactory
) -> bool:
    """
    Reconcile the lockfile on disk with a freshly resolved document.

    Behavior by settings.mode:
        - "off": nothing is read or written.
        - "update": the file is (re)written when missing or different.
        - "error": LockfileOutOfDateError is raised when missing or different.

    Returns:
        bool: True if the file was written.
    """
    if settings.mode == "off":
        return False
    current = read_lockfile(settings.path, registry_factory)
    if current is None:
        mismatches = ["<missing>"]
    else:
        mismatches = lockfile_mismatches(current, lockfile, registry_factory)
    if not mismatches:
        return False
    if settings.mode == "error":
        raise LockfileOutOfDateError(settings.path, mismatches)
    logger.warning("lockfile %s is out of date (%s); updating", settings.path, ", ".join(mismatches))
    write_lockfile(settings.path, lockfile, registry_factory, indent=settings.indent)
    return True
