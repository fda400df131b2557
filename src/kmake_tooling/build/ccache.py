"""ccache report and reset, run inside the build container against the shared cache."""

from __future__ import annotations

from pathlib import Path

from kmake_tooling.build.kmake import ensure_image
from kmake_tooling.config import resolve_config
from kmake_tooling.docker.run import run_in_container


def _run_ccache(project_root: Path, args: list[str], config: dict[str, str] | None) -> int:
    cfg = config if config is not None else resolve_config(None)
    if not ensure_image(cfg["image"]):
        return 1
    return run_in_container(cfg["image"], project_root, cfg, {}, ["ccache", *args])


def run_ccache_stats(project_root: Path, config: dict[str, str] | None = None) -> int:
    """ccache -s. Returns ccache's exit code."""
    return _run_ccache(project_root, ["-s"], config)


def run_ccache_clear(project_root: Path, config: dict[str, str] | None = None) -> int:
    """Clear the cache and zero its statistics (ccache -C -z)."""
    return _run_ccache(project_root, ["-C", "-z"], config)
