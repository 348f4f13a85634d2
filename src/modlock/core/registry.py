"""
Registry handles and the factory that produces them.

A Registry is a source of modules identified by its URL. Handles are never built
ad hoc: they come from a RegistryFactory, which validates the URL and may cache
handles. A lockfile must be decoded with the same factory that produced the
in-memory handles, otherwise URL round-tripping is not guaranteed.

Notes:
    - URL validation is syntactic only; no network access happens here.
    - CachingRegistryFactory is safe to share between threads.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Protocol
from urllib.parse import urlsplit

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .constants import DEFAULT_REGISTRY_SCHEMES
from .errors import InvalidRegistryUrl

__all__ = [
    "Registry",
    "IndexRegistry",
    "RegistryFactory",
    "CachingRegistryFactory",
]

logger = logging.getLogger(__name__)


class Registry(ABC):
    """Handle to a module registry. Equality and hashing are by URL."""

    @property
    @abstractmethod
    def url(self) -> str: ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.is_instance_schema(cls)


class IndexRegistry(Registry):
    """Registry backed by an index laid out under a base URL."""

    def __init__(self, url: str) -> None:
        self._url = url

    @property
    def url(self) -> str:
        return self._url


class RegistryFactory(Protocol):
    """Resolves a registry URL into a Registry handle."""

    def get_registry_with_url(self, url: str) -> Registry:
        """
        Return the registry handle for url.

        Raises:
            InvalidRegistryUrl: If url is not a syntactically valid URI.
        """
        ...


class CachingRegistryFactory:
    """
    Default RegistryFactory: validates URLs and hands out one IndexRegistry per URL.

    Args:
        allowed_schemes (Iterable[str]): Accepted URL schemes (lower-case).

    Examples:
        >>> f = CachingRegistryFactory()
        >>> f.get_registry_with_url("https://bcr.bazel.build") is f.get_registry_with_url(
        ...     "https://bcr.bazel.build"
        ... )
        True
    """

    def __init__(self, allowed_schemes: Iterable[str] = DEFAULT_REGISTRY_SCHEMES) -> None:
        self.allowed_schemes = frozenset(s.lower() for s in allowed_schemes)
        self._cache: dict[str, Registry] = {}
        self._lock = threading.Lock()

    def _validate(self, url: str) -> None:
        if not url or any(c.isspace() for c in url):
            raise InvalidRegistryUrl(f"registry URL contains whitespace or is empty: {url!r}", url)
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise InvalidRegistryUrl(f"registry URL is malformed: {url!r}", url) from exc
        if parts.scheme not in self.allowed_schemes:
            raise InvalidRegistryUrl(
                f"registry URL scheme must be one of {sorted(self.allowed_schemes)} (got {url!r})",
                url,
            )
        if parts.scheme in ("http", "https") and not parts.netloc:
            raise InvalidRegistryUrl(f"registry URL has no host: {url!r}", url)

    def get_registry_with_url(self, url: str) -> Registry:
        with self._lock:
            registry = self._cache.get(url)
            if registry is None:
                self._validate(url)
                logger.debug("creating registry handle for %s", url)
                registry = IndexRegistry(url)
                self._cache[url] = registry
            return registry
