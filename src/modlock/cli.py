from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .core.errors import LockfileCorruptionError
from .core.hashing import hash_module_file
from .core.registry import CachingRegistryFactory
from .core.schema import ModuleLockfile
from .io.config import LockfileSettings
from .io.errors import IoError
from .io.lockfile import read_lockfile


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lockfile", type=str, default="", help="Lockfile path (default from config).")
    p.add_argument("--config", type=str, default=None, help="Explicit TOML config path.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")


def _load(args: argparse.Namespace) -> tuple[str, ModuleLockfile | None]:
    """Read the lockfile named by args (or config); returns (path, document or None)."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = LockfileSettings.load(args.config)
    path = args.lockfile or settings.path
    factory = CachingRegistryFactory(settings.registry_schemes)
    return path, read_lockfile(path, factory)


def _cmd_validate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="validate", description="Check that a lockfile decodes.")
    _add_common(p)
    args = p.parse_args(argv)

    try:
        path, lockfile = _load(args)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except (LockfileCorruptionError, ValueError) as exc:
        # Not wrapped by the reader: fatal registry URLs and malformed module keys.
        print(f"[ERROR] Corrupt lockfile: {exc}", file=sys.stderr)
        return 1
    if lockfile is None:
        print(f"[ERROR] No lockfile at {path}", file=sys.stderr)
        return 1
    print(f"[INFO] {path}: OK ({len(lockfile.module_dep_graph)} modules)")
    return 0


def _cmd_graph(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="graph", description="Print the locked dependency graph.")
    _add_common(p)
    args = p.parse_args(argv)

    try:
        path, lockfile = _load(args)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except (LockfileCorruptionError, ValueError) as exc:
        # Not wrapped by the reader: fatal registry URLs and malformed module keys.
        print(f"[ERROR] Corrupt lockfile: {exc}", file=sys.stderr)
        return 1
    if lockfile is None:
        print(f"[ERROR] No lockfile at {path}", file=sys.stderr)
        return 1
    for key, module in lockfile.module_dep_graph.items():
        registry = f" ({module.registry.url})" if module.registry is not None else ""
        print(f"{key}{registry}")
        for repo_name, dep in module.deps.items():
            print(f"  {repo_name} -> {dep}")
    return 0


def _cmd_hash(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="hash", description="Print the module file hash.")
    p.add_argument("module_file", type=str, help="Path to the module file.")
    args = p.parse_args(argv)

    try:
        content = Path(args.module_file).read_bytes()
    except OSError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    print(hash_module_file(content))
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="modlock", description="Module lockfile utilities CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("validate")
    sub.add_parser("graph")
    sub.add_parser("hash")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "validate":
        code = _cmd_validate(rest)
    elif cmd == "graph":
        code = _cmd_graph(rest)
    elif cmd == "hash":
        code = _cmd_hash(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
