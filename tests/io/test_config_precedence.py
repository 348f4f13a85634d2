from __future__ import annotations

from pathlib import Path

import pytest

from modlock.core.constants import DEFAULT_LOCKFILE_NAME, DEFAULT_REGISTRY_SCHEMES
from modlock.io.config import LockfileSettings
from modlock.io.errors import LockfileConfigError


def _write_modlock_toml(tmp: Path, content: str) -> Path:
    p = tmp / "modlock.toml"
    p.write_text(content)
    return p


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch) -> None:
    for name in ("PATH", "MODE", "INDENT", "REGISTRY_SCHEMES"):
        monkeypatch.delenv(f"MODLOCK_{name}", raising=False)


def test_lockfile_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_modlock_toml(
        tmp_path,
        """
        [lockfile]
        path = "toml.lock"
        mode = "error"
        indent = 4
        """.strip(),
    )
    # Ensure cwd for LockfileSettings.from_toml() search
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("MODLOCK_PATH", "env.lock")
    monkeypatch.setenv("MODLOCK_MODE", "off")

    # Act
    s = LockfileSettings.load()

    # Assert precedence: env > TOML > defaults
    assert s.path == "env.lock"
    assert s.mode == "off"
    assert s.indent == 4  # from TOML
    assert s.registry_schemes == DEFAULT_REGISTRY_SCHEMES  # default


def test_lockfile_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.modlock]
        registry_schemes = ["https"]
        """.strip()
    )
    monkeypatch.chdir(tmp_path)

    s = LockfileSettings.load()

    assert s.registry_schemes == ("https",)
    assert s.path == DEFAULT_LOCKFILE_NAME


def test_lockfile_settings_defaults_without_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    s = LockfileSettings.load()
    assert s == LockfileSettings()
    assert s.mode == "update"
    assert s.indent == 2


def test_invalid_values_are_ignored(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MODLOCK_MODE", "sometimes")
    monkeypatch.setenv("MODLOCK_INDENT", "wide")
    monkeypatch.setenv("MODLOCK_REGISTRY_SCHEMES", "https, file")

    s = LockfileSettings.load()

    assert s.mode == "update"
    assert s.indent == 2
    assert s.registry_schemes == ("https", "file")


def test_broken_toml_is_skipped(tmp_path: Path) -> None:
    p = _write_modlock_toml(tmp_path, "mode = [unterminated")
    assert LockfileSettings.from_toml(p) == LockfileSettings()


@pytest.mark.parametrize(
    "kwargs",
    [{"mode": "always"}, {"indent": -1}, {"registry_schemes": ()}],
)
def test_direct_construction_is_validated(kwargs) -> None:
    with pytest.raises(LockfileConfigError):
        LockfileSettings(**kwargs)
