"""
modlock.codecs — lockfile codec layer.

## Responsibilities
- Scalar codecs for Version, ModuleKey and Registry (the lockfile's string tokens).
- Container codecs for the closed set of collection shapes used by the schema.
- Declared-field codec for pydantic document models.
- Assembly of one immutable CodecRegistry per registry factory.

## Public API
- assemble_lockfile_codec(registry_factory) -> CodecRegistry
- CodecRegistry / CodecRegistryBuilder
- VersionCodec, ModuleKeyCodec, RegistryCodec, registry_codec

## Import DAG discipline
- Depends on stdlib, pydantic and modlock.core only. No file or network IO.

## Examples
```python
from modlock.codecs import assemble_lockfile_codec
from modlock.core import CachingRegistryFactory, ModuleLockfile

codec = assemble_lockfile_codec(CachingRegistryFactory())
lockfile = codec.loads(text, ModuleLockfile)  # doctest: +SKIP
text = codec.dumps(lockfile)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .lockfile import (
    BASE_LOCKFILE_CODECS,
    assemble_lockfile_codec,
    get_lockfile_codec_with_type_adapters,
)
from .registry import CodecRegistry, CodecRegistryBuilder
from .scalars import (
    MODULE_KEY_CODEC,
    VERSION_CODEC,
    ModuleKeyCodec,
    RegistryCodec,
    VersionCodec,
    registry_codec,
)

__all__ = [
    "BASE_LOCKFILE_CODECS",
    "assemble_lockfile_codec",
    "get_lockfile_codec_with_type_adapters",
    "CodecRegistry",
    "CodecRegistryBuilder",
    "VersionCodec",
    "ModuleKeyCodec",
    "RegistryCodec",
    "registry_codec",
    "VERSION_CODEC",
    "MODULE_KEY_CODEC",
]
