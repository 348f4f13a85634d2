"""
Composite module identity (name + version).

Serialized forms:
- ``<root>`` for the distinguished root module;
- ``name@_`` when the version is EMPTY (unspecified/any);
- ``name@<version>`` otherwise.

Names never contain ``@`` (enforced at construction), so the first ``@`` in a
serialized key is always the delimiter.

Examples:
    >>> from modlock.core.module_key import ModuleKey
    >>> from modlock.core.version import Version
    >>> str(ModuleKey.create("foo", Version.parse("1.0")))
    'foo@1.0'
    >>> str(ModuleKey.create("foo", Version.EMPTY))
    'foo@_'
    >>> str(ModuleKey.ROOT)
    '<root>'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .constants import EMPTY_VERSION_TOKEN, MODULE_KEY_DELIMITER, ROOT_MODULE_TOKEN
from .grammar import assert_no_delimiter
from .version import Version

__all__ = ["ModuleKey"]


@dataclass(frozen=True)
class ModuleKey:
    """
    Identity of a module in the dependency graph.

    Attributes:
        name (str): Module name ("" only for the root module).
        version (Version): Module version, or ``Version.EMPTY`` when unspecified.

    Raises:
        GrammarError: If name contains the ``@`` delimiter.
    """

    name: str
    version: Version

    ROOT: ClassVar[ModuleKey]

    def __post_init__(self) -> None:
        assert_no_delimiter(self.name)

    @classmethod
    def create(cls, name: str, version: Version) -> ModuleKey:
        return cls(name, version)

    @property
    def is_root(self) -> bool:
        return self == ModuleKey.ROOT

    def __str__(self) -> str:
        if self.is_root:
            return ROOT_MODULE_TOKEN
        version = EMPTY_VERSION_TOKEN if self.version.is_empty else str(self.version)
        return f"{self.name}{MODULE_KEY_DELIMITER}{version}"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.is_instance_schema(cls)


ModuleKey.ROOT = ModuleKey("", Version.EMPTY)
