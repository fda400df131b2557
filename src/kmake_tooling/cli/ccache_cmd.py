"""`kmake ccache` subcommands: stats, clear."""

import sys

from kmake_tooling.build import run_ccache_clear, run_ccache_stats
from kmake_tooling.cli.parse_common import common_flag_specs, load_cli_config, parse_flags


def run_ccache_argv(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if not argv:
        print("kmake ccache: missing subcommand (stats, clear)", file=sys.stderr)
        sys.exit(1)
    cmd = argv[0]
    flags, _rest = parse_flags(argv[1:], *common_flag_specs())
    config = load_cli_config(flags["project_root"], flags["config"])
    if cmd == "stats":
        sys.exit(run_ccache_stats(flags["project_root"], config))
    if cmd == "clear":
        sys.exit(run_ccache_clear(flags["project_root"], config))
    print(f"Unknown ccache subcommand: {cmd}", file=sys.stderr)
    sys.exit(1)
