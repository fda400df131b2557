"""Toolchain selection for kernel builds (architecture aliases, CROSS_COMPILE, jobs)."""

from .arch import (
    ALIASES,
    CROSS_PREFIXES,
    GCC_PACKAGES,
    Architecture,
    ArchKind,
    known_kinds,
    parse_architecture,
)
from .selector import (
    DEFAULT_ARCH,
    BuildRequest,
    ResolvedBuild,
    available_cpus,
    has_jobs_flag,
    jobs_from_args,
    resolve,
)

__all__ = [
    "ALIASES",
    "CROSS_PREFIXES",
    "DEFAULT_ARCH",
    "GCC_PACKAGES",
    "ArchKind",
    "Architecture",
    "BuildRequest",
    "ResolvedBuild",
    "available_cpus",
    "has_jobs_flag",
    "jobs_from_args",
    "known_kinds",
    "parse_architecture",
    "resolve",
]
