"""
modlock — codec layer and IO for dependency-resolution lockfiles.

Subpackages:
- modlock.core — zero-IO values (Version, ModuleKey, Registry), schema, errors.
- modlock.codecs — lockfile codec registry assembly and scalar/container codecs.
- modlock.io — settings and lockfile read/write.
"""

from __future__ import annotations

__version__ = "0.1.0"
