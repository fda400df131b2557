"""Shared CLI argument parsing for common flags (--project-root, --config, etc.)."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kmake_tooling.config import ConfigError, load_config


def parse_flags(
    argv: list[str],
    *specs: tuple[str, str, Any, Callable[[str], Any] | None],
) -> tuple[dict[str, Any], list[str]]:
    """Parse optional --flag value from argv in one pass.

    Each spec is (key, flag_str, default, converter).
    E.g. ("project_root", "--project-root", Path.cwd, path_resolver).
    converter can be None for string values. Both "--flag value" and
    "--flag=value" are accepted. A flag with no value after it exits with status 1.
    Returns (dict of key -> value, remaining argv).
    """
    result: dict[str, Any] = {}
    for key, _flag, default, _converter in specs:
        result[key] = default() if callable(default) else default

    rest: list[str] = []
    i = 0
    while i < len(argv):
        matched = False
        for key, flag_str, _default, converter in specs:
            if argv[i] == flag_str and i + 1 >= len(argv):
                print(f"kmake: {flag_str} requires a value", file=sys.stderr)
                sys.exit(1)
            if argv[i] == flag_str:
                result[key] = converter(argv[i + 1]) if converter else argv[i + 1]
                i += 2
                matched = True
                break
            if argv[i].startswith(flag_str + "="):
                raw = argv[i][len(flag_str) + 1 :]
                result[key] = converter(raw) if converter else raw
                i += 1
                matched = True
                break
        if not matched:
            rest.append(argv[i])
            i += 1
    return result, rest


def split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first "--": (flag part, verbatim part)."""
    if "--" in argv:
        i = argv.index("--")
        return argv[:i], argv[i + 1 :]
    return argv, []


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --config)."""
    return Path(s).resolve()


def common_flag_specs() -> list[tuple[str, str, Any, Callable[[str], Any] | None]]:
    """--project-root and --config, shared by every subcommand."""
    return [
        ("project_root", "--project-root", Path.cwd, path_resolver),
        ("config", "--config", None, path_resolver),
    ]


def load_cli_config(project_root: Path, config_path: Path | None) -> dict[str, str]:
    """load_config, exiting with status 1 on a bad config file."""
    try:
        return load_config(project_root, config_path)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
