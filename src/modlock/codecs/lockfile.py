"""
Assembly of the lockfile codec registry.

The base configuration is an immutable CodecRegistryBuilder created once at import.
Each call to ``assemble_lockfile_codec`` layers a Registry codec bound to the
caller's factory onto that base and builds a fresh, independent snapshot; the base
is never mutated, so registries assembled for different factories never see each
other's Registry codec.

Registration order (later wins on lookup):
1. JSON primitives (str, int, float, bool) and Literal choices.
2. ModelCodecFactory, the default for lockfile document models.
3. Container factories: ordered mapping, immutable list, immutable map,
   immutable bi-map, optional.
4. Version and ModuleKey codecs.
5. The factory-specific Registry codec (per call, last).

Assembly performs no IO; registry URLs are resolved only when decoding.
"""

from __future__ import annotations

import logging

from ..core.module_key import ModuleKey
from ..core.registry import Registry, RegistryFactory
from ..core.version import Version
from .containers import (
    DictCodecFactory,
    FrozenBiMapCodecFactory,
    FrozenMapCodecFactory,
    OptionalCodecFactory,
    TupleCodecFactory,
)
from .models import ModelCodecFactory
from .registry import CodecRegistry, CodecRegistryBuilder
from .scalars import (
    MODULE_KEY_CODEC,
    VERSION_CODEC,
    LiteralCodecFactory,
    PrimitiveCodec,
    registry_codec,
)

__all__ = [
    "BASE_LOCKFILE_CODECS",
    "assemble_lockfile_codec",
    "get_lockfile_codec_with_type_adapters",
]

logger = logging.getLogger(__name__)

BASE_LOCKFILE_CODECS: CodecRegistryBuilder = (
    CodecRegistryBuilder()
    .with_codec(str, PrimitiveCodec(str))
    .with_codec(int, PrimitiveCodec(int))
    .with_codec(float, PrimitiveCodec(float))
    .with_codec(bool, PrimitiveCodec(bool))
    .with_factory(LiteralCodecFactory())
    .with_factory(ModelCodecFactory())
    .with_factory(DictCodecFactory())
    .with_factory(FrozenMapCodecFactory())
    .with_factory(TupleCodecFactory())
    .with_factory(FrozenBiMapCodecFactory())
    .with_factory(OptionalCodecFactory())
    .with_codec(Version, VERSION_CODEC)
    .with_codec(ModuleKey, MODULE_KEY_CODEC)
)


def assemble_lockfile_codec(registry_factory: RegistryFactory) -> CodecRegistry:
    """
    Build the codec registry used to read and write the lockfile.

    Args:
        registry_factory (RegistryFactory): Factory used to resolve registry URLs on
            decode. It must be the factory that produced the in-memory Registry
            handles being written.

    Returns:
        CodecRegistry: A new snapshot; Version, ModuleKey and Registry values are
        routed to their scalar codecs anywhere in the document, including inside
        containers.

    Examples:
        >>> from modlock.core.registry import CachingRegistryFactory
        >>> from modlock.core.module_key import ModuleKey
        >>> codec = assemble_lockfile_codec(CachingRegistryFactory())
        >>> codec.decode("<root>", ModuleKey) is ModuleKey.ROOT
        True
    """
    logger.debug("assembling lockfile codec for %r", registry_factory)
    return BASE_LOCKFILE_CODECS.with_codec(Registry, registry_codec(registry_factory)).build()


# Adapter-style alias for lockfile readers and writers.
get_lockfile_codec_with_type_adapters = assemble_lockfile_codec
