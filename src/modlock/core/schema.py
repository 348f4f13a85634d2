"""
Pydantic v2 models for the module lockfile document.

Each persisted type declares its fields explicitly; the codec layer walks these
declarations (``model_fields``) to read and write the document, so the lockfile
field contract is statically auditable. Field names are lower_snake in Python and
camelCase on the wire.

Responsibilities
- Define ResolutionFlags, Module and ModuleLockfile.
- Enforce module-name grammar and key/name/version consistency on Module.
- Carry Version, ModuleKey and Registry values as-is (no coercion from strings;
  strings are turned into domain values by the codec layer only).

Style
- Zero-IO (stdlib + pydantic only).
- Models are frozen and forbid extra fields.

Examples:
    >>> from modlock.core.module_key import ModuleKey
    >>> from modlock.core.version import Version
    >>> from modlock.core.schema import Module
    >>> m = Module(name="foo", version=Version.parse("1.0"), key=ModuleKey.create("foo", Version.parse("1.0")))
    >>> str(m.key)
    'foo@1.0'
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .constants import LOCK_FILE_VERSION
from .errors import SchemaError
from .frozen import FrozenBiMap, FrozenMap
from .grammar import assert_valid_module_name
from .module_key import ModuleKey
from .registry import Registry
from .version import Version

__all__ = [
    "ResolutionFlags",
    "Module",
    "ModuleLockfile",
]

_MODEL_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class ResolutionFlags(BaseModel):
    """
    Resolution flags that influenced the recorded dependency graph.

    Attributes:
        allowed_yanked_versions (tuple[str, ...]): Yanked module versions the user allowed.
        check_direct_dependencies (str): One of {"off", "warning", "error"}.
        ignore_dev_dependency (bool): Whether dev dependencies were ignored.
        registries (tuple[str, ...]): Registry URLs passed on the command line.
    """

    model_config = _MODEL_CONFIG

    allowed_yanked_versions: tuple[str, ...] = ()
    check_direct_dependencies: Literal["off", "warning", "error"] = "warning"
    ignore_dev_dependency: bool = False
    registries: tuple[str, ...] = ()


class Module(BaseModel):
    """
    A resolved module in the dependency graph.

    Attributes:
        name (str): Module name ("" for the root module).
        version (Version): Resolved version (EMPTY for the root module).
        key (ModuleKey): Identity of this module; must agree with name/version.
        repo_name (str): Canonical repository name of the module.
        execution_platforms_to_register (tuple[str, ...]): Platform labels.
        toolchains_to_register (tuple[str, ...]): Toolchain labels.
        deps (FrozenBiMap[str, ModuleKey]): Repo name of each direct dependency to
            its key; each dependency appears once.
        registry (Registry | None): Registry the module was fetched from; None for
            the root module and for overridden modules.

    Raises:
        pydantic.ValidationError: If name breaks the module-name grammar or the key
            disagrees with name/version.
    """

    model_config = _MODEL_CONFIG

    name: str
    version: Version
    key: ModuleKey
    repo_name: str = ""
    execution_platforms_to_register: tuple[str, ...] = ()
    toolchains_to_register: tuple[str, ...] = ()
    deps: FrozenBiMap[str, ModuleKey] = Field(default_factory=FrozenBiMap)
    registry: Registry | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        if v:
            assert_valid_module_name(v)
        return v

    @model_validator(mode="after")
    def _validate_key(self) -> Module:
        if self.key.is_root:
            if self.name or not self.version.is_empty:
                raise SchemaError("root module must have an empty name and version")
            return self
        if self.key.name != self.name or self.key.version != self.version:
            raise SchemaError(
                f"module key {str(self.key)!r} does not match name={self.name!r} "
                f"version={str(self.version)!r}"
            )
        return self


class ModuleLockfile(BaseModel):
    """
    The lockfile document.

    Attributes:
        lock_file_version (int): Document format version (LOCK_FILE_VERSION).
        module_file_hash (str): SHA-256 of the root module file.
        flags (ResolutionFlags): Flags used for resolution.
        local_override_hashes (FrozenMap[str, str]): Module name to module file hash
            for locally overridden modules.
        module_dep_graph (dict[ModuleKey, Module]): Resolved graph in resolution order.

    Raises:
        pydantic.ValidationError: If a graph entry is stored under a key other than
            its own ``Module.key``.
    """

    model_config = _MODEL_CONFIG

    lock_file_version: int = LOCK_FILE_VERSION
    module_file_hash: str
    flags: ResolutionFlags = Field(default_factory=ResolutionFlags)
    local_override_hashes: FrozenMap[str, str] = Field(default_factory=FrozenMap)
    module_dep_graph: dict[ModuleKey, Module] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_graph_keys(self) -> ModuleLockfile:
        for key, module in self.module_dep_graph.items():
            if key != module.key:
                raise SchemaError(
                    f"moduleDepGraph entry {str(key)!r} holds module {str(module.key)!r}"
                )
        return self
