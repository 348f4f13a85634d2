from __future__ import annotations

import json
from pathlib import Path

import pytest

from modlock.cli import main
from modlock.core.hashing import hash_module_file
from modlock.io.lockfile import write_lockfile


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.fixture
def lockfile_path(tmp_path: Path, monkeypatch, sample_lockfile, registry_factory) -> str:
    monkeypatch.chdir(tmp_path)
    for name in ("PATH", "MODE", "INDENT", "REGISTRY_SCHEMES"):
        monkeypatch.delenv(f"MODLOCK_{name}", raising=False)
    path = str(tmp_path / "MODULE.lock")
    write_lockfile(path, sample_lockfile, registry_factory)
    return path


def test_validate_ok(lockfile_path: str, capsys) -> None:
    assert _run(["validate", "--lockfile", lockfile_path]) == 0
    out = capsys.readouterr().out
    assert "OK (3 modules)" in out


def test_validate_uses_default_path(lockfile_path: str, capsys) -> None:
    assert _run(["validate"]) == 0
    assert "MODULE.lock: OK" in capsys.readouterr().out


def test_validate_missing_file(tmp_path: Path, capsys) -> None:
    assert _run(["validate", "--lockfile", str(tmp_path / "nope.lock")]) == 1
    assert "No lockfile" in capsys.readouterr().err


def test_validate_corrupt_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "MODULE.lock"
    path.write_text("[]", encoding="utf-8")
    assert _run(["validate", "--lockfile", str(path)]) == 1
    assert "[ERROR] Failed to read and parse the lockfile" in capsys.readouterr().err


def _write_edited(path: str, edit) -> None:
    doc = json.loads(Path(path).read_text(encoding="utf-8"))
    edit(doc)
    Path(path).write_text(json.dumps(doc), encoding="utf-8")


def test_validate_bad_registry_url(lockfile_path: str, capsys) -> None:
    _write_edited(
        lockfile_path,
        lambda doc: doc["moduleDepGraph"]["foo@1.0"].update(registry="not a uri"),
    )
    assert _run(["validate", "--lockfile", lockfile_path]) == 1
    assert "[ERROR] Corrupt lockfile: Lockfile registry URL is not valid" in capsys.readouterr().err


def test_validate_module_key_without_delimiter(lockfile_path: str, capsys) -> None:
    _write_edited(
        lockfile_path,
        lambda doc: doc["moduleDepGraph"]["foo@1.0"].update(deps={"x": "nodelim"}),
    )
    assert _run(["validate", "--lockfile", lockfile_path]) == 1
    assert "[ERROR] Corrupt lockfile" in capsys.readouterr().err


def test_graph_bad_registry_url(lockfile_path: str, capsys) -> None:
    _write_edited(
        lockfile_path,
        lambda doc: doc["moduleDepGraph"]["foo@1.0"].update(registry="not a uri"),
    )
    assert _run(["graph", "--lockfile", lockfile_path]) == 1
    assert capsys.readouterr().out == ""


def test_graph_prints_keys_and_deps(lockfile_path: str, capsys) -> None:
    assert _run(["graph", "--lockfile", lockfile_path]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "<root>",
        "  foo -> foo@1.0",
        "  bar -> bar@_",
        "foo@1.0 (https://bcr.example.com)",
        "  bar -> bar@_",
        "bar@_",
    ]


def test_hash_prints_digest(tmp_path: Path, capsys) -> None:
    module_file = tmp_path / "MODULE.bazel"
    module_file.write_text('module(name = "foo")\n', encoding="utf-8")
    assert _run(["hash", str(module_file)]) == 0
    assert capsys.readouterr().out.strip() == hash_module_file(module_file.read_bytes())


def test_hash_missing_file(tmp_path: Path) -> None:
    assert _run(["hash", str(tmp_path / "missing")]) == 1


def test_unknown_command(capsys) -> None:
    assert _run(["frobnicate"]) == 2
    assert "Unknown command" in capsys.readouterr().err
