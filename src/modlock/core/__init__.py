"""
Core package aggregator for modlock contracts (values, grammar, schema, errors, serde).

## Contracts (single source of truth)
- Version — ordered module version with an EMPTY "unspecified" value.
- ModuleKey — (name, version) identity with the ROOT sentinel.
- Registry / RegistryFactory — URL-identified module sources and their factory.
- FrozenMap / FrozenBiMap — immutable containers used by the schema.
- Schema — pydantic models for the lockfile document.
- Hashing/Serde — canonical JSON and module file hashing.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Module names never contain ``@``; see grammar.

## Downstream usage
- modlock.codecs — turns these values into lockfile JSON and back.
- modlock.io — reads/writes ModuleLockfile documents on disk.

## Examples
```python
from modlock.core import ModuleKey, Version
key = ModuleKey.create("rules_cc", Version.parse("0.0.9"))
str(key)  # 'rules_cc@0.0.9'
```
"""

from __future__ import annotations

from .frozen import FrozenBiMap, FrozenMap
from .module_key import ModuleKey
from .registry import CachingRegistryFactory, IndexRegistry, Registry, RegistryFactory
from .schema import Module, ModuleLockfile, ResolutionFlags
from .version import Version

__all__ = [
    "Version",
    "ModuleKey",
    "Registry",
    "IndexRegistry",
    "RegistryFactory",
    "CachingRegistryFactory",
    "FrozenMap",
    "FrozenBiMap",
    "Module",
    "ModuleLockfile",
    "ResolutionFlags",
]
