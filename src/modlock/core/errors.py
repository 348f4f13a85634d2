"""
Core exception types raised by grammar checks, version parsing, and lockfile codecs.

Provides typed exceptions for core-domain failures:
- GrammarError for module-name and delimiter violations.
- SchemaError for lockfile document constraints (key/name/version consistency).
- VersionParseError for text that is not a valid version string.
- InvalidRegistryUrl for registry URLs that are not syntactically valid URIs.
- LockfileParseError for recoverable decode failures (bad version text, bad
  module-key version segment, wrong JSON shape for a scalar).
- LockfileCorruptionError for unrecoverable decode failures (bad registry URL).
- CodecLookupError when no codec is registered for a declared type.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - LockfileParseError always keeps the offending raw string in its message so a
      hand-inspected lockfile can be fixed.
    - LockfileCorruptionError is not a LockfileParseError; readers that recover
      from parse errors let it propagate.

Examples:
    Annotate a parse error with the path where it occurred.

    >>> from modlock.core.errors import LockfileParseError
    >>> err = LockfileParseError("Unable to parse Version 'x' from the lockfile", raw="x")
    >>> err.add_path("version")
    >>> err.add_path("moduleDepGraph")
    >>> str(err)
    "Unable to parse Version 'x' from the lockfile (at moduleDepGraph.version)"
"""

from __future__ import annotations

__all__ = [
    "GrammarError",
    "SchemaError",
    "VersionParseError",
    "InvalidRegistryUrl",
    "LockfileParseError",
    "LockfileCorruptionError",
    "CodecLookupError",
]


class GrammarError(ValueError):
    """Module-name grammar failure (e.g., a name containing the '@' delimiter)."""


class SchemaError(ValueError):
    """Lockfile document constraint failure (cross-field consistency rules)."""


class VersionParseError(ValueError):
    """Text is not a valid version string."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class InvalidRegistryUrl(ValueError):
    """A registry URL is not a syntactically valid URI."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class LockfileParseError(ValueError):
    """
    Recoverable failure decoding a value read from the lockfile.

    Attributes:
        raw (object): The offending raw JSON value (usually a string).
        path (list[str]): Field/key path from the document root to the value,
            filled in by enclosing codecs as the error propagates.
    """

    def __init__(self, message: str, raw: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw = raw
        self.path: list[str] = []

    def add_path(self, segment: str) -> None:
        """Prepend a path segment; called by enclosing codecs on the way up."""
        self.path.insert(0, segment)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} (at {'.'.join(self.path)})"


class LockfileCorruptionError(RuntimeError):
    """Unrecoverable lockfile inconsistency (e.g., a registry URL that is not a URI)."""


class CodecLookupError(TypeError):
    """No codec is registered for a declared type."""
