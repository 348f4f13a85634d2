"""
Canonical JSON serialization and hashing helpers.

Provides a single canonical JSON policy and SHA-256 helpers so that hashes recorded
in the lockfile (``moduleFileHash``) are stable across runs
and consumers. This module is zero-IO and uses only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Hashing is performed over UTF-8 bytes.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "hash_module_file",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _sha256_hexdigest(data: bytes) -> str:
    h = hashlib.sha256()
    h.update(data)
    return h.hexdigest()


def hash_module_file(content: str | bytes) -> str:
    """
    Compute the hash recorded as ``moduleFileHash`` for a module file.

    Args:
        content (str | bytes): Module file contents; text is encoded as UTF-8.

    Returns:
        str: SHA-256 hex digest.

    Examples:
        >>> hash_module_file("module(name='foo')") == hash_module_file(b"module(name='foo')")
        True
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return _sha256_hexdigest(content)
