"""
modlock.io — lockfile IO layer.

## Responsibilities
- Read and write ModuleLockfile documents with atomic tmp→final renames.
- Report corrupt lockfiles as LockfileReadError naming the file.
- Reconcile the on-disk lockfile with a resolved graph according to the lockfile mode.

## Public API
- LockfileSettings — configuration (env > TOML > defaults).
- read_lockfile / write_lockfile / loads_lockfile / dumps_lockfile
- update_lockfile / lockfile_mismatches

## Import DAG discipline
- Depends only on stdlib, pydantic, modlock.core and modlock.codecs.
- MUST NOT import modlock.cli.
"""

from __future__ import annotations

from .config import LockfileSettings
from .lockfile import (
    dumps_lockfile,
    lockfile_mismatches,
    loads_lockfile,
    read_lockfile,
    update_lockfile,
    write_lockfile,
)

__all__ = [
    "LockfileSettings",
    "read_lockfile",
    "write_lockfile",
    "loads_lockfile",
    "dumps_lockfile",
    "lockfile_mismatches",
    "update_lockfile",
]
