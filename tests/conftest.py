"""Pytest fixtures for kmake tooling tests."""

from pathlib import Path

import pytest

from kmake_tooling.config import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def _clean_kmake_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Host KMAKE_* / CCACHE_* variables must not leak into config under test."""
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def kernel_tree(tmp_path: Path) -> Path:
    """Minimal kernel-like source tree (top-level Makefile). Returns its root."""
    root = tmp_path / "linux"
    root.mkdir()
    (root / "Makefile").write_text("VERSION = 6\n")
    return root
