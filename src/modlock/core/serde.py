"""
Lightweight JSON serialization/deserialization utilities.

Provides `json_loads` and `json_dumps_pretty` as thin wrappers around the stdlib
`json` module and re-exports `json_dumps_canonical` from `modlock.core.hashing` to
keep a single canonical JSON policy. This module is zero-IO.

Notes:
    - `json_dumps_pretty` is the lockfile layout: insertion order is kept (the
      codec layer already emits fields in declaration order), two-space indent,
      trailing newline.
    - Use `json_dumps_canonical` for deterministic strings prior to hashing.
"""

from __future__ import annotations

import json
from typing import Any

# Re-export canonical dumps to keep a single canonicalization policy.
from .hashing import json_dumps_canonical  # noqa: F401

__all__ = [
    "json_loads",
    "json_dumps_pretty",
    "json_dumps_canonical",
]


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Raises:
        json.JSONDecodeError: If s is not valid JSON.
    """
    return json.loads(s)


def json_dumps_pretty(obj: Any, indent: int = 2) -> str:
    """Serialize obj in the human-diffable lockfile layout."""
    return json.dumps(obj, indent=indent, ensure_ascii=False) + "\n"
