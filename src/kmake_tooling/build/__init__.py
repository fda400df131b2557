"""Containerized kernel builds: make, shell, ccache maintenance."""

from .ccache import run_ccache_clear, run_ccache_stats
from .kmake import make_command, run_kmake, run_shell

__all__ = [
    "make_command",
    "run_ccache_clear",
    "run_ccache_stats",
    "run_kmake",
    "run_shell",
]
