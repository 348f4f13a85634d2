from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from modlock.codecs.lockfile import (
    BASE_LOCKFILE_CODECS,
    assemble_lockfile_codec,
    get_lockfile_codec_with_type_adapters,
)
from modlock.core.errors import LockfileCorruptionError, LockfileParseError
from modlock.core.module_key import ModuleKey
from modlock.core.registry import CachingRegistryFactory, Registry
from modlock.core.schema import Module, ModuleLockfile
from modlock.core.version import Version


def test_alias_is_same_function() -> None:
    assert get_lockfile_codec_with_type_adapters is assemble_lockfile_codec


def test_assembly_does_not_touch_the_factory(recording_factory) -> None:
    assemble_lockfile_codec(recording_factory)
    assert recording_factory.calls == []


def test_each_call_gets_an_independent_registry_codec(recording_factory) -> None:
    other = CachingRegistryFactory()
    a = assemble_lockfile_codec(recording_factory)
    b = assemble_lockfile_codec(other)
    assert a is not b

    a.decode("https://a.example.com", Registry)
    b.decode("https://b.example.com", Registry)
    assert recording_factory.calls == ["https://a.example.com"]

    before = len(BASE_LOCKFILE_CODECS.factories)
    assemble_lockfile_codec(other)
    assert len(BASE_LOCKFILE_CODECS.factories) == before


def test_wire_layout(sample_lockfile, registry_factory) -> None:
    raw = assemble_lockfile_codec(registry_factory).encode(sample_lockfile)
    assert list(raw) == [
        "lockFileVersion",
        "moduleFileHash",
        "flags",
        "localOverrideHashes",
        "moduleDepGraph",
    ]
    assert raw["lockFileVersion"] == 1
    assert raw["flags"]["checkDirectDependencies"] == "warning"
    assert raw["localOverrideHashes"] == {"bar": "def456"}
    assert list(raw["moduleDepGraph"]) == ["<root>", "foo@1.0", "bar@_"]

    root = raw["moduleDepGraph"]["<root>"]
    assert root["key"] == "<root>"
    assert root["version"] == ""
    assert root["deps"] == {"foo": "foo@1.0", "bar": "bar@_"}
    assert "registry" not in root

    foo = raw["moduleDepGraph"]["foo@1.0"]
    assert foo["registry"] == "https://bcr.example.com"
    assert foo["toolchainsToRegister"] == ["//:cc_toolchain"]


def test_document_round_trip(sample_lockfile, registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    text = codec.dumps(sample_lockfile)
    back = codec.loads(text, ModuleLockfile)
    assert back == sample_lockfile
    assert list(back.module_dep_graph) == list(sample_lockfile.module_dep_graph)
    foo = back.module_dep_graph[ModuleKey.create("foo", Version.parse("1.0"))]
    # Same factory, same cached handle.
    assert foo.registry is sample_lockfile.module_dep_graph[foo.key].registry


def test_missing_optional_fields_fall_back_to_defaults(registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    doc = codec.decode({"moduleFileHash": "h"}, ModuleLockfile)
    assert doc.lock_file_version == 1
    assert doc.module_dep_graph == {}
    assert doc.flags.check_direct_dependencies == "warning"


def test_bad_version_reports_document_path(sample_lockfile, registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    raw = copy.deepcopy(codec.encode(sample_lockfile))
    raw["moduleDepGraph"]["foo@1.0"]["version"] = "1.0!"
    with pytest.raises(LockfileParseError) as excinfo:
        codec.decode(raw, ModuleLockfile)
    msg = str(excinfo.value)
    assert "'1.0!'" in msg
    assert "moduleDepGraph.foo@1.0.version" in msg


def test_bad_registry_url_is_fatal(sample_lockfile, registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    raw = copy.deepcopy(codec.encode(sample_lockfile))
    raw["moduleDepGraph"]["foo@1.0"]["registry"] = "bad uri"
    with pytest.raises(LockfileCorruptionError):
        codec.decode(raw, ModuleLockfile)


def test_inconsistent_key_fails_validation(sample_lockfile, registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    raw = copy.deepcopy(codec.encode(sample_lockfile))
    raw["moduleDepGraph"]["foo@1.0"]["key"] = "foo@2.0"
    with pytest.raises(ValidationError, match="does not match"):
        codec.decode(raw, ModuleLockfile)


def test_unknown_keys_are_ignored(registry_factory) -> None:
    codec = assemble_lockfile_codec(registry_factory)
    module = codec.decode(
        {"name": "foo", "version": "1.0", "key": "foo@1.0", "extraThing": 3}, Module
    )
    assert module.key == ModuleKey.create("foo", Version.parse("1.0"))
