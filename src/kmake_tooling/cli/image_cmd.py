"""`kmake image` subcommands: build, generate-dockerfile, check."""

import sys
from pathlib import Path

from kmake_tooling.cli.parse_common import common_flag_specs, load_cli_config, parse_flags
from kmake_tooling.docker.generate_dockerfile import DEFAULT_BASE_IMAGE
from kmake_tooling.docker.generate_dockerfile import run as run_generate_dockerfile
from kmake_tooling.docker.image import build_image
from kmake_tooling.docker.image import run_check as run_image_check


def run_image_argv(argv: list[str] | None = None) -> None:
    """Parse image subcommand from argv and run. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if not argv:
        print("kmake image: missing subcommand (build, generate-dockerfile, check)", file=sys.stderr)
        sys.exit(1)
    cmd = argv[0]
    flags, rest = parse_flags(
        argv[1:],
        ("output", "--output", None, Path),
        ("template", "--template", None, Path),
        ("base_image", "--base-image", DEFAULT_BASE_IMAGE, None),
        *common_flag_specs(),
    )
    project_root = flags["project_root"]
    config = load_cli_config(project_root, flags["config"])

    if cmd == "build":
        rc = build_image(
            project_root,
            config["image"],
            dockerfile=config["dockerfile"],
            dry_run="--dry-run" in rest,
            workdir=config["workdir"],
            ccache_dir=config["ccache_container_dir"],
        )
        sys.exit(rc)

    if cmd == "generate-dockerfile":
        rc = run_generate_dockerfile(
            project_root,
            output_path=flags["output"] or Path(config["dockerfile"]),
            template_path=flags["template"],
            base_image=flags["base_image"],
            workdir=config["workdir"],
            ccache_dir=config["ccache_container_dir"],
        )
        sys.exit(rc)

    if cmd == "check":
        sys.exit(run_image_check(config["image"]))

    print(f"Unknown image subcommand: {cmd}", file=sys.stderr)
    sys.exit(1)
