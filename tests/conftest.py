from __future__ import annotations

import pytest

from modlock.core.errors import InvalidRegistryUrl
from modlock.core.frozen import FrozenBiMap, FrozenMap
from modlock.core.module_key import ModuleKey
from modlock.core.registry import CachingRegistryFactory, IndexRegistry, Registry
from modlock.core.schema import Module, ModuleLockfile, ResolutionFlags
from modlock.core.version import Version


class RecordingRegistryFactory:
    """Test factory: rejects URLs containing spaces and records every lookup."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def get_registry_with_url(self, url: str) -> Registry:
        self.calls.append(url)
        if " " in url:
            raise InvalidRegistryUrl(f"bad uri: {url!r}", url)
        return IndexRegistry(url)


@pytest.fixture
def recording_factory() -> RecordingRegistryFactory:
    return RecordingRegistryFactory()


@pytest.fixture
def registry_factory() -> CachingRegistryFactory:
    return CachingRegistryFactory()


def make_lockfile(factory: CachingRegistryFactory) -> ModuleLockfile:
    v1 = Version.parse("1.0")
    foo = ModuleKey.create("foo", v1)
    bar = ModuleKey.create("bar", Version.EMPTY)
    registry = factory.get_registry_with_url("https://bcr.example.com")
    root = Module(
        name="",
        version=Version.EMPTY,
        key=ModuleKey.ROOT,
        deps=FrozenBiMap({"foo": foo, "bar": bar}),
    )
    foo_module = Module(
        name="foo",
        version=v1,
        key=foo,
        repo_name="foo~1.0",
        toolchains_to_register=("//:cc_toolchain",),
        deps=FrozenBiMap({"bar": bar}),
        registry=registry,
    )
    bar_module = Module(name="bar", version=Version.EMPTY, key=bar, repo_name="bar~override")
    return ModuleLockfile(
        module_file_hash="abc123",
        flags=ResolutionFlags(allowed_yanked_versions=("foo@0.9",), registries=("https://bcr.example.com",)),
        local_override_hashes=FrozenMap({"bar": "def456"}),
        module_dep_graph={ModuleKey.ROOT: root, foo: foo_module, bar: bar_module},
    )


@pytest.fixture
def sample_lockfile(registry_factory: CachingRegistryFactory) -> ModuleLockfile:
    return make_lockfile(registry_factory)
