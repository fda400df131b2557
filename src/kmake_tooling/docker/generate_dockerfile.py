"""Generate the kernel build-environment Dockerfile (cross GCCs for every toolchain bucket, ccache)."""

from __future__ import annotations

import sys
from pathlib import Path

from kmake_tooling.toolchain.arch import GCC_PACKAGES, known_kinds

DEFAULT_BASE_IMAGE = "debian:bookworm-slim"

# Host tools the kernel build needs regardless of target.
COMMON_PACKAGES: list[str] = [
    "bc",
    "bison",
    "build-essential",
    "ccache",
    "cpio",
    "flex",
    "git",
    "kmod",
    "libelf-dev",
    "libncurses-dev",
    "libssl-dev",
    "python3",
    "rsync",
    "u-boot-tools",
    "xz-utils",
]

DEFAULT_TEMPLATE = """\
FROM {{base_image}}

ARG USER_UID=1000
ARG USER_GID=1000

ENV DEBIAN_FRONTEND=noninteractive
RUN apt-get update && apt-get install -y --no-install-recommends \\
{{packages}} \\
 && rm -rf /var/lib/apt/lists/*

RUN groupadd -o -g ${USER_GID} builder \\
 && useradd -o -m -u ${USER_UID} -g ${USER_GID} builder \\
 && mkdir -p {{ccache_dir}} {{workdir}} \\
 && chown builder:builder {{ccache_dir}} {{workdir}}

ENV CCACHE_DIR={{ccache_dir}}
USER builder
WORKDIR {{workdir}}
"""


def environment_packages() -> list[str]:
    """Common packages plus one cross GCC per known toolchain, sorted and de-duplicated."""
    cross = [GCC_PACKAGES[k] for k in known_kinds()]
    return sorted(set(COMMON_PACKAGES) | set(cross))


def render_dockerfile(
    template: str,
    base_image: str = DEFAULT_BASE_IMAGE,
    workdir: str = "/src",
    ccache_dir: str = "/ccache",
) -> str:
    packages = " \\\n".join(f"    {p}" for p in environment_packages())
    content = template.replace("{{base_image}}", base_image)
    content = content.replace("{{packages}}", packages)
    content = content.replace("{{workdir}}", workdir)
    content = content.replace("{{ccache_dir}}", ccache_dir)
    return content


def generate_dockerfile(
    project_root: Path | None = None,
    output_path: Path | None = None,
    template_path: Path | None = None,
    base_image: str = DEFAULT_BASE_IMAGE,
    workdir: str = "/src",
    ccache_dir: str = "/ccache",
) -> Path:
    """
    Write the build-environment Dockerfile.
    Writes to docker/Dockerfile under project_root unless output_path is set.
    template_path replaces the built-in template; it must exist.
    Returns the output path.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    out = output_path or (root / "docker" / "Dockerfile")
    if not out.is_absolute():
        out = root / out

    if template_path is not None:
        if not template_path.exists():
            msg = f"Template not found: {template_path}"
            raise FileNotFoundError(msg)
        template = template_path.read_text()
    else:
        template = DEFAULT_TEMPLATE

    content = render_dockerfile(
        template, base_image=base_image, workdir=workdir, ccache_dir=ccache_dir
    )
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content)
    print(f"✅ Generated: {out}")
    return out


def run(
    project_root: Path | None = None,
    output_path: Path | None = None,
    template_path: Path | None = None,
    base_image: str = DEFAULT_BASE_IMAGE,
    workdir: str = "/src",
    ccache_dir: str = "/ccache",
) -> int:
    """CLI entry: generate Dockerfile. Returns 0 on success, 1 on error."""
    try:
        generate_dockerfile(
            project_root,
            output_path=output_path,
            template_path=template_path,
            base_image=base_image,
            workdir=workdir,
            ccache_dir=ccache_dir,
        )
        return 0
    except FileNotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
