"""
Module-name grammar and helpers.

Module names are lower-case identifiers that start with a letter, may contain
letters, digits, ``.``, ``_`` and ``-``, and end with a letter or digit. The
empty name is reserved for the root module.

Responsibilities
- Validate module names for the lockfile schema.
- Guard the module-key delimiter: a name never contains ``@``, so a serialized
  key ``name@version`` always splits unambiguously on the first ``@``.

Examples
--------
>>> from modlock.core.grammar import is_valid_module_name
>>> is_valid_module_name("rules_python")
True
>>> is_valid_module_name("Rules@Python")
False
"""

from __future__ import annotations

import re
from typing import Final

from .constants import MODULE_KEY_DELIMITER
from .errors import GrammarError

__all__ = [
    "is_valid_module_name",
    "assert_valid_module_name",
    "assert_no_delimiter",
]

_MODULE_NAME_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z](?:[a-z0-9._-]*[a-z0-9])?$")


def is_valid_module_name(value: str) -> bool:
    """
    Check whether a string is a valid (non-root) module name.

    Args:
      value (str): Candidate module name.

    Returns:
      bool: True if value matches the module-name grammar, False otherwise.

    Examples:
      >>> is_valid_module_name("protobuf")
      True
      >>> is_valid_module_name("3rdparty")
      False
    """
    return bool(_MODULE_NAME_RE.match(value or ""))


def assert_valid_module_name(value: str, what: str = "module name") -> None:
    """
    Validate a module name.

    Args:
      value (str): Candidate module name.
      what (str): Human-friendly label used in the error message.

    Raises:
      GrammarError: If value does not match the module-name grammar.
    """
    if not is_valid_module_name(value):
        raise GrammarError(
            f"{what} must start with a lower-case letter and contain only "
            f"[a-z0-9._-] (got: {value!r})"
        )


def assert_no_delimiter(name: str) -> None:
    """
    Reject names that contain the module-key delimiter.

    Raises:
      GrammarError: If name contains ``@``.
    """
    if MODULE_KEY_DELIMITER in name:
        raise GrammarError(
            f"module name must not contain {MODULE_KEY_DELIMITER!r} (got: {name!r})"
        )
