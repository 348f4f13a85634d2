import pytest
from pydantic import ValidationError

from modlock.core.frozen import FrozenBiMap
from modlock.core.module_key import ModuleKey
from modlock.core.schema import Module, ModuleLockfile, ResolutionFlags
from modlock.core.version import Version

V1 = Version.parse("1.0")


def test_module_accepts_matching_key() -> None:
    m = Module(name="foo", version=V1, key=ModuleKey.create("foo", V1))
    assert m.registry is None
    assert isinstance(m.deps, FrozenBiMap)
    assert len(m.deps) == 0


def test_module_rejects_mismatched_key() -> None:
    with pytest.raises(ValidationError, match="does not match"):
        Module(name="foo", version=V1, key=ModuleKey.create("bar", V1))


def test_module_rejects_bad_name() -> None:
    with pytest.raises(ValidationError, match="lower-case letter"):
        Module(name="Foo", version=V1, key=ModuleKey.create("Foo", V1))


def test_root_module_must_be_empty() -> None:
    Module(name="", version=Version.EMPTY, key=ModuleKey.ROOT)
    with pytest.raises(ValidationError, match="root module"):
        Module(name="", version=V1, key=ModuleKey.ROOT)


def test_module_rejects_plain_strings_for_domain_values() -> None:
    with pytest.raises(ValidationError):
        Module(name="foo", version="1.0", key="foo@1.0")  # type: ignore[arg-type]


def test_lockfile_graph_keys_must_match_modules() -> None:
    m = Module(name="foo", version=V1, key=ModuleKey.create("foo", V1))
    with pytest.raises(ValidationError, match="holds module"):
        ModuleLockfile(
            module_file_hash="h",
            module_dep_graph={ModuleKey.create("foo", Version.parse("2.0")): m},
        )


def test_aliases_are_camel_case() -> None:
    assert ModuleLockfile.model_fields["lock_file_version"].alias == "lockFileVersion"
    assert ResolutionFlags.model_fields["check_direct_dependencies"].alias == "checkDirectDependencies"


def test_flags_reject_unknown_check_mode() -> None:
    with pytest.raises(ValidationError):
        ResolutionFlags(check_direct_dependencies="loud")  # type: ignore[arg-type]
