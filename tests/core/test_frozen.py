import pytest

from modlock.core.frozen import FrozenBiMap, FrozenMap


def test_frozen_map_is_read_only_and_ordered() -> None:
    m = FrozenMap({"b": 2, "a": 1})
    assert list(m) == ["b", "a"]
    assert m["a"] == 1
    assert m == {"b": 2, "a": 1}
    with pytest.raises(TypeError):
        m["c"] = 3  # type: ignore[index]


def test_frozen_map_is_hashable() -> None:
    assert hash(FrozenMap({"a": 1, "b": 2})) == hash(FrozenMap({"b": 2, "a": 1}))


def test_bimap_inverse() -> None:
    bm = FrozenBiMap({"x": 1, "y": 2})
    assert bm.inverse[1] == "x"
    assert bm.inverse == {1: "x", 2: "y"}


def test_bimap_rejects_duplicate_values() -> None:
    with pytest.raises(ValueError, match="duplicate value 1"):
        FrozenBiMap({"x": 1, "y": 1})
