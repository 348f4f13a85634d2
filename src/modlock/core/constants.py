"""
Lockfile wire-format tokens and defaults.

Defines the literal tokens used by the module-key encoding and the defaults consumed
by the IO layer. This module is zero-IO and uses only the Python standard library.

Notes:
    - A serialized module key is exactly ``name@version``, ``name@_`` or ``<root>``.
    - Changing any token here changes the lockfile wire format.
"""

from __future__ import annotations

__all__ = [
    "ROOT_MODULE_TOKEN",
    "MODULE_KEY_DELIMITER",
    "EMPTY_VERSION_TOKEN",
    "LOCK_FILE_VERSION",
    "DEFAULT_LOCKFILE_NAME",
    "DEFAULT_REGISTRY_URL",
    "DEFAULT_REGISTRY_SCHEMES",
]

# Serialized form of the root module key.
ROOT_MODULE_TOKEN: str = "<root>"

# Separates the module name from its version in a serialized module key.
MODULE_KEY_DELIMITER: str = "@"

# Version segment written for a module whose version is unspecified.
EMPTY_VERSION_TOKEN: str = "_"

# Lockfile document format version written into "lockFileVersion".
LOCK_FILE_VERSION: int = 1

DEFAULT_LOCKFILE_NAME: str = "MODULE.lock"

DEFAULT_REGISTRY_URL: str = "https://bcr.bazel.build"

# URL schemes accepted by the default registry factory.
DEFAULT_REGISTRY_SCHEMES: tuple[str, ...] = ("https", "http", "file")
