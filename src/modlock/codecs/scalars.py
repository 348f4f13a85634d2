"""
Scalar codecs: Version, ModuleKey, Registry, JSON primitives and literals.

Wire format (each a JSON string):
- Version   -> canonical version text, e.g. "1.2.3". Build metadata is not part of
  the canonical text, so "1.0+b1" is read as 1.0 and written back as "1.0".
- ModuleKey -> "<root>", "name@_" (unspecified version) or "name@1.2.3".
- Registry  -> the registry URL, e.g. "https://example.com/registry".

Errors
- Bad version text (standalone or inside a module key) raises LockfileParseError,
  chained from the VersionParseError, with the full offending string in the message.
- A module-key token without "@" is not handled specially: the tuple-unpacking
  ValueError from the split propagates unchanged.
- A registry URL the factory rejects raises LockfileCorruptionError (fatal).
- A JSON value of the wrong JSON type raises LockfileParseError.

Encoding never fails for well-formed in-memory values.
"""

from __future__ import annotations

from typing import Any, Literal, get_args, get_origin

from ..core.constants import EMPTY_VERSION_TOKEN, MODULE_KEY_DELIMITER, ROOT_MODULE_TOKEN
from ..core.errors import (
    InvalidRegistryUrl,
    LockfileCorruptionError,
    LockfileParseError,
    VersionParseError,
)
from ..core.module_key import ModuleKey
from ..core.registry import Registry, RegistryFactory
from ..core.version import Version
from .base import Codec, JsonValue

__all__ = [
    "VersionCodec",
    "ModuleKeyCodec",
    "RegistryCodec",
    "PrimitiveCodec",
    "LiteralCodecFactory",
    "VERSION_CODEC",
    "MODULE_KEY_CODEC",
    "registry_codec",
]


def _expect_str(raw: JsonValue, what: str) -> str:
    if not isinstance(raw, str):
        raise LockfileParseError(
            f"Expected a string for {what} in the lockfile, got {raw!r}", raw=raw
        )
    return raw


class VersionCodec:
    def encode(self, value: Version) -> str:
        return str(value)

    def decode(self, raw: JsonValue) -> Version:
        text = _expect_str(raw, "Version")
        try:
            return Version.parse(text)
        except VersionParseError as exc:
            raise LockfileParseError(
                f"Unable to parse Version {text!r} from the lockfile", raw=text
            ) from exc


class ModuleKeyCodec:
    def encode(self, value: ModuleKey) -> str:
        return str(value)

    def decode(self, raw: JsonValue) -> ModuleKey:
        text = _expect_str(raw, "ModuleKey")
        if text == ROOT_MODULE_TOKEN:
            return ModuleKey.ROOT
        name, version_part = text.split(MODULE_KEY_DELIMITER, 1)
        if version_part == EMPTY_VERSION_TOKEN:
            return ModuleKey.create(name, Version.EMPTY)
        try:
            version = Version.parse(version_part)
        except VersionParseError as exc:
            raise LockfileParseError(
                f"Unable to parse ModuleKey {text!r} version from the lockfile", raw=text
            ) from exc
        return ModuleKey.create(name, version)


class RegistryCodec:
    """
    Registry codec bound to the factory used to resolve URLs on decode.

    Args:
        factory (RegistryFactory): Factory that produced (or will produce) every
            Registry handle written or read with this codec.
    """

    def __init__(self, factory: RegistryFactory) -> None:
        self.factory = factory

    def encode(self, value: Registry) -> str:
        return value.url

    def decode(self, raw: JsonValue) -> Registry:
        url = _expect_str(raw, "Registry")
        try:
            return self.factory.get_registry_with_url(url)
        except InvalidRegistryUrl as exc:
            raise LockfileCorruptionError(f"Lockfile registry URL is not valid: {url!r}") from exc


def registry_codec(factory: RegistryFactory) -> RegistryCodec:
    """Build the Registry codec for factory."""
    return RegistryCodec(factory)


class PrimitiveCodec:
    """Type-checked pass-through codec for str, int, float and bool."""

    def __init__(self, tp: type) -> None:
        self.tp = tp

    def encode(self, value: Any) -> JsonValue:
        return value

    def decode(self, raw: JsonValue) -> Any:
        # bool is a subclass of int; keep them apart in both directions.
        if self.tp is float and isinstance(raw, int) and not isinstance(raw, bool):
            return float(raw)
        if isinstance(raw, self.tp) and (self.tp is bool or not isinstance(raw, bool)):
            return raw
        raise LockfileParseError(
            f"Expected {self.tp.__name__} in the lockfile, got {raw!r}", raw=raw
        )


VERSION_CODEC = VersionCodec()
MODULE_KEY_CODEC = ModuleKeyCodec()


class _LiteralCodec:
    def __init__(self, choices: tuple[Any, ...]) -> None:
        self.choices = choices

    def encode(self, value: Any) -> JsonValue:
        return value

    def decode(self, raw: JsonValue) -> Any:
        if raw not in self.choices:
            raise LockfileParseError(
                f"Expected one of {list(self.choices)} in the lockfile, got {raw!r}", raw=raw
            )
        return raw


class LiteralCodecFactory:
    """Enumerated JSON scalars declared as ``Literal[...]``."""

    def create(self, registry: Any, tp: Any) -> Codec[Any] | None:
        if get_origin(tp) is not Literal:
            return None
        return _LiteralCodec(get_args(tp))
