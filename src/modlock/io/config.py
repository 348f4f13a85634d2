"""
Configuration for the modlock.io module.

Defines LockfileSettings, a frozen dataclass carrying runtime configuration for
lockfile IO. Defaults are sourced from modlock.core.constants.

Source of truth
- modlock.core.constants.DEFAULT_LOCKFILE_NAME, DEFAULT_REGISTRY_SCHEMES

Import DAG discipline
- Depends only on stdlib and modlock.core.
- Does not import the CLI.

Notes
- Precedence: env (MODLOCK_*) > TOML > defaults.
- Unparseable values in a layer are ignored and the lower layer's value is kept.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from modlock.core.constants import DEFAULT_LOCKFILE_NAME, DEFAULT_REGISTRY_SCHEMES

from .errors import LockfileConfigError

LockfileMode = Literal["update", "error", "off"]

_MODES: frozenset[str] = frozenset({"update", "error", "off"})


@dataclass(frozen=True)
class LockfileSettings:
    """
    Runtime settings for the modlock.io layer.

    Attributes:
        path (str): Lockfile path (default "MODULE.lock" in the working directory).
        mode (Literal["update","error","off"]): What update_lockfile does:
            "update" rewrites a stale lockfile, "error" raises on mismatch, "off" skips.
        indent (int): JSON indent used when writing (>= 0).
        registry_schemes (tuple[str, ...]): URL schemes accepted by the registry factory.

    Examples:
        >>> from modlock.io import LockfileSettings
        >>> LockfileSettings(mode="error")  # doctest: +ELLIPSIS
        LockfileSettings(...)
    """

    path: str = DEFAULT_LOCKFILE_NAME
    mode: LockfileMode = "update"
    indent: int = 2
    registry_schemes: tuple[str, ...] = DEFAULT_REGISTRY_SCHEMES

    def __post_init__(self) -> None:
        if self.mode not in _MODES:
            raise LockfileConfigError(f"lockfile mode must be one of {sorted(_MODES)}, got {self.mode!r}")
        if self.indent < 0:
            raise LockfileConfigError(f"indent must be >= 0, got {self.indent}")
        if not self.registry_schemes:
            raise LockfileConfigError("registry_schemes must not be empty")

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: LockfileSettings, cfg: dict[str, Any] | None) -> LockfileSettings:
        """Apply a loose config mapping onto LockfileSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "path" in cfg and isinstance(cfg["path"], str) and cfg["path"]:
            s = replace(s, path=cfg["path"])

        if "mode" in cfg and isinstance(cfg["mode"], str):
            mode = cfg["mode"].strip().lower()
            if mode in _MODES:
                s = replace(s, mode=mode)  # type: ignore[arg-type]

        if "indent" in cfg:
            try:
                indent = int(cfg["indent"])
            except (TypeError, ValueError):
                indent = -1
            if indent >= 0:
                s = replace(s, indent=indent)

        if "registry_schemes" in cfg:
            raw = cfg["registry_schemes"]
            if isinstance(raw, str):
                raw = raw.split(",")
            if isinstance(raw, (list, tuple)):
                schemes = tuple(str(x).strip().lower() for x in raw if str(x).strip())
                if schemes:
                    s = replace(s, registry_schemes=schemes)

        return s

    @classmethod
    def from_env(
        cls, base: LockfileSettings | None = None, prefix: str = "MODLOCK_"
    ) -> LockfileSettings:
        """
        Build LockfileSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - MODLOCK_PATH
            - MODLOCK_MODE ("update" | "error" | "off")
            - MODLOCK_INDENT
            - MODLOCK_REGISTRY_SCHEMES (comma-separated)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name in ("PATH", "MODE", "INDENT", "REGISTRY_SCHEMES"):
            v = os.getenv(prefix + name)
            if v:
                mapping[name.lower()] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> LockfileSettings:
        """
        Build LockfileSettings from a TOML file.

        Search order when `path` is None:
            1) ./modlock.toml (with either a [lockfile] table or top-level keys)
            2) ./pyproject.toml under [tool.modlock]

        Returns defaults if no file is present. Unreadable or invalid TOML files are skipped.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "modlock.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("modlock") if isinstance(tool, dict) else None
            elif isinstance(data.get("lockfile"), dict):
                cfg = data["lockfile"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> LockfileSettings:
        """
        Load LockfileSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (modlock.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
