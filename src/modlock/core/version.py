"""
Module version value type.

A version has the textual shape ``RELEASE[-PRERELEASE][+BUILD]`` where RELEASE and
PRERELEASE are dot-separated alphanumeric identifiers. Build metadata is accepted
on parse and dropped: it does not take part in identity or ordering. The empty
string is the distinguished ``Version.EMPTY`` ("unspecified/any").

Ordering
- Identifiers compare pairwise; numeric identifiers compare as integers and sort
  before alphabetic ones, alphabetic identifiers compare lexically.
- A release that is a prefix of another sorts first (1.0 < 1.0.1).
- A prerelease sorts before the bare release (1.0-rc1 < 1.0).
- EMPTY sorts after every other version.

This module is zero-IO.

Examples:
    >>> from modlock.core.version import Version
    >>> str(Version.parse("1.2.3-rc1+build.5"))
    '1.2.3-rc1'
    >>> Version.parse("1.10") > Version.parse("1.9")
    True
    >>> Version.parse("") is Version.EMPTY
    True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, ClassVar, Final

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import VersionParseError

__all__ = ["Version"]

_IDENT = r"[0-9A-Za-z]+"
_VERSION_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<release>{_IDENT}(?:\.{_IDENT})*)"
    rf"(?:-(?P<prerelease>{_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


def _identifier_key(ident: str) -> tuple[int, int, str]:
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True)
class Version:
    """
    Immutable, ordered module version.

    Attributes:
        release (tuple[str, ...]): Release identifiers (e.g., ("1", "2", "3")).
        prerelease (tuple[str, ...]): Prerelease identifiers (e.g., ("rc1",)).

    Raises:
        VersionParseError: From ``Version.parse`` when the text is malformed.
    """

    release: tuple[str, ...] = ()
    prerelease: tuple[str, ...] = ()

    EMPTY: ClassVar[Version]

    @classmethod
    def parse(cls, text: str) -> Version:
        """
        Parse version text.

        Args:
            text (str): Version string such as "1.2.3" or "" for EMPTY.

        Returns:
            Version: Parsed version; ``Version.EMPTY`` for the empty string.

        Raises:
            VersionParseError: If text is not a valid version string.
        """
        if text == "":
            return cls.EMPTY
        m = _VERSION_RE.match(text)
        if m is None:
            raise VersionParseError(f"bad version (does not match format): {text!r}", text)
        prerelease = m.group("prerelease")
        return cls(
            release=tuple(m.group("release").split(".")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
        )

    @property
    def is_empty(self) -> bool:
        return not self.release

    def _sort_key(self) -> tuple[Any, ...]:
        if self.is_empty:
            return (1,)
        release = tuple(_identifier_key(i) for i in self.release)
        if self.prerelease:
            pre: tuple[Any, ...] = (0, tuple(_identifier_key(i) for i in self.prerelease))
        else:
            pre = (1, ())
        return (0, release, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        text = ".".join(self.release)
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.is_instance_schema(cls)


Version.EMPTY = Version()
