"""
Container codec factories.

The set of container shapes is closed and selected by the declared field type:

| Declared type          | Shape                        | JSON   | Decoded as    |
|------------------------|------------------------------|--------|---------------|
| ``dict[K, V]``         | ordered mapping              | object | dict          |
| ``tuple[T, ...]``      | immutable list               | array  | tuple         |
| ``FrozenMap[K, V]``    | immutable map                | object | FrozenMap     |
| ``FrozenBiMap[K, V]``  | immutable bi-directional map | object | FrozenBiMap   |
| ``T | None``           | optional                     | null/T | None or T     |

Element, key and value codecs are resolved through the registry, so scalar codecs
(Version, ModuleKey, Registry) apply inside containers. Map keys must encode to
JSON strings. Object key order is preserved in both directions.
"""

from __future__ import annotations

import types
from collections.abc import Callable, Mapping
from typing import Any, Union, get_args, get_origin

from ..core.errors import LockfileParseError
from ..core.frozen import FrozenBiMap, FrozenMap
from .base import Codec, JsonValue, decoding_at
from .registry import CodecRegistry

__all__ = [
    "DictCodecFactory",
    "TupleCodecFactory",
    "FrozenMapCodecFactory",
    "FrozenBiMapCodecFactory",
    "OptionalCodecFactory",
]

_NONE_TYPE = type(None)


class _MappingCodec:
    def __init__(
        self,
        key_codec: Codec[Any],
        value_codec: Codec[Any],
        build: Callable[[dict[Any, Any]], Mapping[Any, Any]],
        what: str,
    ) -> None:
        self.key_codec = key_codec
        self.value_codec = value_codec
        self.build = build
        self.what = what

    def encode(self, value: Mapping[Any, Any]) -> JsonValue:
        out: dict[str, JsonValue] = {}
        for k, v in value.items():
            key = self.key_codec.encode(k)
            if not isinstance(key, str):
                raise TypeError(f"{self.what} keys must encode to strings, got {key!r}")
            out[key] = self.value_codec.encode(v)
        return out

    def decode(self, raw: JsonValue) -> Mapping[Any, Any]:
        if not isinstance(raw, dict):
            raise LockfileParseError(
                f"Expected a JSON object for {self.what} in the lockfile, got {raw!r}", raw=raw
            )
        items: dict[Any, Any] = {}
        for k, v in raw.items():
            with decoding_at(k):
                items[self.key_codec.decode(k)] = self.value_codec.decode(v)
        return self.build(items)


class _TupleCodec:
    def __init__(self, element_codec: Codec[Any]) -> None:
        self.element_codec = element_codec

    def encode(self, value: tuple[Any, ...]) -> JsonValue:
        return [self.element_codec.encode(v) for v in value]

    def decode(self, raw: JsonValue) -> tuple[Any, ...]:
        if not isinstance(raw, list):
            raise LockfileParseError(
                f"Expected a JSON array in the lockfile, got {raw!r}", raw=raw
            )
        out = []
        for i, v in enumerate(raw):
            with decoding_at(str(i)):
                out.append(self.element_codec.decode(v))
        return tuple(out)


class _OptionalCodec:
    def __init__(self, inner: Codec[Any]) -> None:
        self.inner = inner

    def encode(self, value: Any) -> JsonValue:
        return None if value is None else self.inner.encode(value)

    def decode(self, raw: JsonValue) -> Any:
        return None if raw is None else self.inner.decode(raw)


def _build_bimap(items: dict[Any, Any]) -> FrozenBiMap[Any, Any]:
    try:
        return FrozenBiMap(items)
    except ValueError as exc:
        raise LockfileParseError(
            f"Bi-directional map in the lockfile has a {exc}", raw=items
        ) from exc


class DictCodecFactory:
    """Ordered mapping: ``dict[K, V]``."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) is not dict:
            return None
        key_tp, value_tp = get_args(tp)
        return _MappingCodec(
            registry.codec_for(key_tp), registry.codec_for(value_tp), dict, "mapping"
        )


class TupleCodecFactory:
    """Immutable list: ``tuple[T, ...]``."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) is not tuple:
            return None
        args = get_args(tp)
        if len(args) != 2 or args[1] is not Ellipsis:
            return None
        return _TupleCodec(registry.codec_for(args[0]))


class FrozenMapCodecFactory:
    """Immutable map: ``FrozenMap[K, V]``."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) is not FrozenMap:
            return None
        key_tp, value_tp = get_args(tp)
        return _MappingCodec(
            registry.codec_for(key_tp), registry.codec_for(value_tp), FrozenMap, "immutable map"
        )


class FrozenBiMapCodecFactory:
    """Immutable bi-directional map: ``FrozenBiMap[K, V]``."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) is not FrozenBiMap:
            return None
        key_tp, value_tp = get_args(tp)
        return _MappingCodec(
            registry.codec_for(key_tp), registry.codec_for(value_tp), _build_bimap, "bi-map"
        )


class OptionalCodecFactory:
    """Optional value: ``T | None``."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) not in (Union, types.UnionType):
            return None
        args = [a for a in get_args(tp) if a is not _NONE_TYPE]
        if len(args) != 1 or len(get_args(tp)) != 2:
            return None
        return _OptionalCodec(registry.codec_for(args[0]))
