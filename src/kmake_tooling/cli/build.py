"""`kmake make` and the per-architecture shortcuts (native, x86_64, arm64, arm, riscv)."""

from __future__ import annotations

import sys

from kmake_tooling.build import run_kmake, run_shell
from kmake_tooling.cli.parse_common import (
    common_flag_specs,
    load_cli_config,
    parse_flags,
    split_passthrough,
)

# shortcut command -> architecture name handed to the selector (None = configured default)
ARCH_SHORTCUTS: dict[str, str | None] = {
    "native": None,
    "x86_64": "x86_64",
    "arm64": "arm64",
    "arm": "arm",
    "riscv": "riscv",
}


def _parse_jobs(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        n = 0
    if n < 1:
        print(f"kmake: --jobs expects a positive integer, got {s!r}", file=sys.stderr)
        sys.exit(1)
    return n


def _make_flag_specs():
    return [
        ("arch", "--arch", None, None),
        ("cross_compile", "--cross-compile", None, None),
        ("jobs", "--jobs", None, _parse_jobs),
        *common_flag_specs(),
    ]


def run_make_argv(argv: list[str] | None = None, arch: str | None = None) -> int:
    """Parse kmake flags, forward everything else to make. Returns make's exit code.

    arch fixes the architecture (shortcut commands); --arch still overrides it.
    Arguments after "--" are never interpreted as kmake flags.
    """
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    head, tail = split_passthrough(argv)
    flags, rest = parse_flags(head, *_make_flag_specs())
    config = load_cli_config(flags["project_root"], flags["config"])
    return run_kmake(
        flags["project_root"],
        rest + tail,
        arch=flags["arch"] if flags["arch"] is not None else arch,
        cross_compile=flags["cross_compile"],
        jobs=flags["jobs"],
        config=config,
    )


def run_shell_argv(argv: list[str] | None = None) -> int:
    """kmake shell [--arch A] [--cross-compile P]."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    flags, rest = parse_flags(
        argv,
        ("arch", "--arch", None, None),
        ("cross_compile", "--cross-compile", None, None),
        *common_flag_specs(),
    )
    if rest:
        print(f"kmake shell: unexpected arguments: {' '.join(rest)}", file=sys.stderr)
        return 1
    config = load_cli_config(flags["project_root"], flags["config"])
    return run_shell(
        flags["project_root"],
        arch=flags["arch"],
        cross_compile=flags["cross_compile"],
        config=config,
    )


def _shortcut_main(arch: str | None) -> None:
    from kmake_tooling.cli.main import configure_logging

    configure_logging()
    sys.exit(run_make_argv(sys.argv[1:], arch=arch))


def main_native() -> None:
    """Console script kmake-native."""
    _shortcut_main(ARCH_SHORTCUTS["native"])


def main_x86_64() -> None:
    """Console script kmake-x86_64."""
    _shortcut_main(ARCH_SHORTCUTS["x86_64"])


def main_arm64() -> None:
    """Console script kmake-arm64."""
    _shortcut_main(ARCH_SHORTCUTS["arm64"])


def main_arm() -> None:
    """Console script kmake-arm."""
    _shortcut_main(ARCH_SHORTCUTS["arm"])


def main_riscv() -> None:
    """Console script kmake-riscv."""
    _shortcut_main(ARCH_SHORTCUTS["riscv"])
