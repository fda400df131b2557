"""Toolchain selection: BuildRequest -> ResolvedBuild (ARCH, CROSS_COMPILE, -jN)."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field

from kmake_tooling.toolchain.arch import ArchKind, parse_architecture

log = logging.getLogger(__name__)

DEFAULT_ARCH = "arm64"
FALLBACK_PARALLELISM = 4

_JOBS_RE = re.compile(r"^(?:-j|--jobs=)(\d+)$")
_JOBS_SPLIT_FLAGS = ("-j", "--jobs")


def available_cpus() -> int:
    """Processing units usable by this process; FALLBACK_PARALLELISM when unknown."""
    if hasattr(os, "sched_getaffinity"):
        try:
            n = len(os.sched_getaffinity(0))
        except OSError:
            n = 0
        if n > 0:
            return n
    return os.cpu_count() or FALLBACK_PARALLELISM


def jobs_from_args(args: list[str]) -> int | None:
    """Job count make will use from args (-jN, -j N, --jobs=N, --jobs N); last one wins.

    A bare -j (unlimited jobs) is not a count and returns None.
    """
    jobs: int | None = None
    for i, a in enumerate(args):
        m = _JOBS_RE.match(a)
        if m:
            jobs = int(m.group(1))
        elif a in _JOBS_SPLIT_FLAGS and i + 1 < len(args) and args[i + 1].isdigit():
            jobs = int(args[i + 1])
    return jobs


def has_jobs_flag(args: list[str]) -> bool:
    """True if args already set a job count."""
    return jobs_from_args(args) is not None


@dataclass
class BuildRequest:
    """Raw build invocation: architecture, explicit prefix, jobs, make arguments."""

    architecture_name: str | None = None
    cross_compile_prefix: str | None = None
    parallelism: int | None = None
    extra_arguments: list[str] = field(default_factory=list)

    @classmethod
    def from_argv(
        cls,
        argv: list[str],
        architecture_name: str | None = None,
        cross_compile_prefix: str | None = None,
        parallelism: int | None = None,
    ) -> BuildRequest:
        """Lift ARCH=... and CROSS_COMPILE=... out of make-style argv.

        Keyword values win over lifted tokens. Remaining arguments keep their order.
        """
        arch_tok: str | None = None
        prefix_tok: str | None = None
        rest: list[str] = []
        for a in argv:
            if a.startswith("ARCH="):
                arch_tok = a[len("ARCH=") :]
            elif a.startswith("CROSS_COMPILE="):
                prefix_tok = a[len("CROSS_COMPILE=") :]
            else:
                rest.append(a)
        return cls(
            architecture_name=architecture_name if architecture_name is not None else arch_tok,
            cross_compile_prefix=(
                cross_compile_prefix if cross_compile_prefix is not None else prefix_tok
            ),
            parallelism=parallelism,
            extra_arguments=rest,
        )


@dataclass(frozen=True)
class ResolvedBuild:
    architecture: str
    cross_compile_prefix: str
    parallelism: int
    make_arguments: list[str]
    environment: dict[str, str]


def resolve(
    request: BuildRequest,
    default_arch: str = DEFAULT_ARCH,
    cpu_count: int | None = None,
) -> ResolvedBuild:
    """Resolve a request into concrete ARCH / CROSS_COMPILE / make arguments.

    Never fails: unknown architecture names log a warning and build natively.
    An explicit cross_compile_prefix always wins over the architecture's prefix.
    """
    if not request.architecture_name:
        architecture = default_arch
        prefix = ""
    else:
        arch = parse_architecture(request.architecture_name)
        if arch.kind is ArchKind.UNKNOWN:
            log.warning(
                "Unknown architecture '%s'; building natively without CROSS_COMPILE",
                arch.name,
            )
        architecture = arch.name
        prefix = arch.cross_prefix

    if request.cross_compile_prefix:
        prefix = request.cross_compile_prefix

    make_arguments = list(request.extra_arguments)
    given = jobs_from_args(make_arguments)
    if given is not None:
        jobs = given
    else:
        if request.parallelism is not None:
            jobs = request.parallelism
        elif cpu_count is not None:
            jobs = cpu_count
        else:
            jobs = available_cpus()
        make_arguments.append(f"-j{jobs}")

    environment = {"ARCH": architecture}
    if prefix:
        environment["CROSS_COMPILE"] = prefix

    return ResolvedBuild(
        architecture=architecture,
        cross_compile_prefix=prefix,
        parallelism=jobs,
        make_arguments=make_arguments,
        environment=environment,
    )
