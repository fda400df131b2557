"""Main CLI entry point for kmake (containerized kernel cross-builds)."""

import logging
import os
import sys

from kmake_tooling.cli import build as build_cli
from kmake_tooling.cli import ccache_cmd, image_cmd

USAGE = [
    "Usage: kmake <command> [args...]",
    "Commands:",
    "  make [--arch A] [--cross-compile P] [--jobs N] [make args...]",
    "                         - Run make in the build container",
    "  native|x86_64|arm64|arm|riscv [make args...]",
    "                         - make with a fixed architecture (native = default arch)",
    "  shell [--arch A]       - Interactive shell in the build container",
    "  image build|generate-dockerfile|check",
    "                         - Build-environment image",
    "  ccache stats|clear     - Inspect or reset the compiler cache",
]


def configure_logging() -> None:
    """Log to stderr; level from KMAKE_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get("KMAKE_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main() -> None:
    """Main CLI entry point."""
    configure_logging()
    if len(sys.argv) < 2:
        for line in USAGE:
            print(line, file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command == "make":
        sys.exit(build_cli.run_make_argv())
    elif command in build_cli.ARCH_SHORTCUTS:
        sys.exit(build_cli.run_make_argv(arch=build_cli.ARCH_SHORTCUTS[command]))
    elif command == "shell":
        sys.exit(build_cli.run_shell_argv())
    elif command == "image":
        image_cmd.run_image_argv()
    elif command == "ccache":
        ccache_cmd.run_ccache_argv()
    elif command in ("-h", "--help", "help"):
        for line in USAGE:
            print(line)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
