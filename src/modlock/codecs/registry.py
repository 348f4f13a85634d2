"""
Codec registry and its immutable builder.

A CodecRegistryBuilder is an immutable, ordered list of codec factories. Every
``with_*`` call returns a new builder, so a base configuration can be shared and
extended per caller without any caller observing another's additions. ``build()``
produces an independent CodecRegistry snapshot.

Lookup precedence
- Factories are consulted most-recently-registered first; the first factory that
  returns a codec wins. Registering a codec for a type that already has one
  therefore shadows the earlier registration (last-registration-wins).
- Codecs are memoized per snapshot. Self-referential types resolve through a
  deferred codec that is bound once the outer codec is built.

Examples:
    >>> from modlock.codecs.registry import CodecRegistryBuilder
    >>> from modlock.codecs.scalars import PrimitiveCodec
    >>> reg = CodecRegistryBuilder().with_codec(str, PrimitiveCodec(str)).build()
    >>> reg.decode("x", str)
    'x'
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any

from ..core.errors import CodecLookupError
from ..core.serde import json_dumps_pretty, json_loads
from .base import Codec, CodecFactory, ExactTypeFactory, JsonValue

__all__ = [
    "CodecRegistry",
    "CodecRegistryBuilder",
]

logger = logging.getLogger(__name__)


class _DeferredCodec:
    """Stand-in handed out while the codec for a recursive type is being built."""

    def __init__(self, tp: Any) -> None:
        self.tp = tp
        self.target: Codec[Any] | None = None

    def _resolved(self) -> Codec[Any]:
        if self.target is None:
            raise CodecLookupError(f"codec for {self.tp!r} used before it was built")
        return self.target

    def encode(self, value: Any) -> JsonValue:
        return self._resolved().encode(value)

    def decode(self, raw: JsonValue) -> Any:
        return self._resolved().decode(raw)


class CodecRegistry:
    """
    Immutable snapshot mapping declared types to codecs.

    Args:
        factories (tuple[CodecFactory, ...]): Factories in lookup order (newest first).

    Notes:
        Safe to share between threads; the memo cache is lock-guarded.
    """

    def __init__(self, factories: tuple[CodecFactory, ...]) -> None:
        self._factories = factories
        self._cache: dict[Any, Codec[Any]] = {}
        self._pending: dict[Any, _DeferredCodec] = {}
        self._lock = threading.RLock()

    @property
    def factories(self) -> tuple[CodecFactory, ...]:
        return self._factories

    def codec_for(self, tp: Any) -> Codec[Any]:
        """
        Resolve the codec for a declared type.

        Args:
            tp (Any): A class or a parameterized generic (e.g., ``tuple[str, ...]``).

        Returns:
            Codec: The codec from the most recently registered matching factory.

        Raises:
            CodecLookupError: If no factory handles tp.
        """
        with self._lock:
            cached = self._cache.get(tp)
            if cached is not None:
                return cached
            pending = self._pending.get(tp)
            if pending is not None:
                return pending
            deferred = _DeferredCodec(tp)
            self._pending[tp] = deferred
            try:
                codec = self._create(tp)
            finally:
                del self._pending[tp]
            deferred.target = codec
            self._cache[tp] = codec
            return codec

    def _create(self, tp: Any) -> Codec[Any]:
        for factory in self._factories:
            codec = factory.create(self, tp)
            if codec is not None:
                return codec
        raise CodecLookupError(f"no codec registered for {tp!r}")

    def encode(self, value: Any, tp: Any = None) -> JsonValue:
        """Encode value using the codec for tp (default: the value's own class)."""
        return self.codec_for(type(value) if tp is None else tp).encode(value)

    def decode(self, raw: JsonValue, tp: Any) -> Any:
        return self.codec_for(tp).decode(raw)

    def dumps(self, value: Any, tp: Any = None, indent: int = 2) -> str:
        """Encode value and render it in the lockfile JSON layout."""
        return json_dumps_pretty(self.encode(value, tp), indent=indent)

    def loads(self, text: str, tp: Any) -> Any:
        """Parse JSON text and decode it as tp."""
        return self.decode(json_loads(text), tp)


@dataclass(frozen=True)
class CodecRegistryBuilder:
    """
    Immutable, ordered registration list for building CodecRegistry snapshots.

    Attributes:
        factories (tuple[CodecFactory, ...]): Factories in registration order.
    """

    factories: tuple[CodecFactory, ...] = ()

    def with_factory(self, factory: CodecFactory) -> CodecRegistryBuilder:
        return replace(self, factories=self.factories + (factory,))

    def with_codec(self, tp: type, codec: Codec[Any]) -> CodecRegistryBuilder:
        return self.with_factory(ExactTypeFactory(tp, codec))

    def build(self) -> CodecRegistry:
        logger.debug("building codec registry with %d factories", len(self.factories))
        return CodecRegistry(tuple(reversed(self.factories)))
