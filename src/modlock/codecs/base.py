"""
Codec and codec-factory protocols.

A Codec converts one Python type to a JSON value (str, int, float, bool, None,
list, dict) and back. A CodecFactory inspects a declared type (a class or a
parameterized generic such as ``dict[str, ModuleKey]``) and returns a Codec for it,
or None when it does not handle that type. Factories receive the registry so
they can resolve codecs for element and field types.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from ..core.errors import LockfileParseError

if TYPE_CHECKING:
    from .registry import CodecRegistry

__all__ = [
    "JsonValue",
    "Codec",
    "CodecFactory",
    "ExactTypeFactory",
    "decoding_at",
]

T = TypeVar("T")

JsonValue = Any


class Codec(Protocol[T]):
    def encode(self, value: T) -> JsonValue: ...

    def decode(self, raw: JsonValue) -> T: ...


class CodecFactory(Protocol):
    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None: ...


class ExactTypeFactory:
    """Routes exactly one declared type to a fixed codec."""

    def __init__(self, tp: type, codec: Codec[Any]) -> None:
        self.tp = tp
        self.codec = codec

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        return self.codec if tp is self.tp else None

    def __repr__(self) -> str:
        return f"ExactTypeFactory({self.tp.__name__})"


@contextmanager
def decoding_at(segment: str) -> Iterator[None]:
    """Annotate LockfileParseErrors raised inside the block with a path segment."""
    try:
        yield
    except LockfileParseError as exc:
        exc.add_path(segment)
        raise
