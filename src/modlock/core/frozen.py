"""
Immutable container types used by the lockfile schema.

- FrozenMap: insertion-ordered, read-only mapping.
- FrozenBiMap: read-only mapping whose values are unique, with an ``inverse`` view.

Both are hashable when their contents are, and validate as plain instances in
pydantic models (no coercion from dicts).

Examples:
    >>> from modlock.core.frozen import FrozenBiMap
    >>> bm = FrozenBiMap({"a": 1, "b": 2})
    >>> bm.inverse[2]
    'b'
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

__all__ = ["FrozenMap", "FrozenBiMap"]

K = TypeVar("K")
V = TypeVar("V")


class FrozenMap(Mapping[K, V], Generic[K, V]):
    """Insertion-ordered immutable mapping."""

    __slots__ = ("_data", "_hash")

    def __init__(self, items: Mapping[K, V] | None = None, /, **kwargs: V) -> None:
        data: dict[Any, V] = dict(items or {})
        data.update(kwargs)
        self._data = data
        self._hash: int | None = None

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.is_instance_schema(cls)


class FrozenBiMap(FrozenMap[K, V]):
    """
    Immutable mapping with unique values.

    Raises:
        ValueError: If two keys map to the same value.
    """

    __slots__ = ("_inverse",)

    def __init__(self, items: Mapping[K, V] | None = None, /, **kwargs: V) -> None:
        super().__init__(items, **kwargs)
        inverse: dict[V, K] = {}
        for key, value in self._data.items():
            if value in inverse:
                raise ValueError(
                    f"duplicate value {value!r} for keys {inverse[value]!r} and {key!r}"
                )
            inverse[value] = key
        self._inverse = FrozenMap(inverse)

    @property
    def inverse(self) -> FrozenMap[V, K]:
        return self._inverse
