"""Run kernel make (or a shell) inside the build container with the resolved toolchain.

The image is checked before anything runs; a missing image is reported with
the command that builds it. After that, the container's exit code is
returned unchanged.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from kmake_tooling.config import config_bool, resolve_config
from kmake_tooling.docker.image import docker_available, image_exists, print_missing_image
from kmake_tooling.docker.run import run_in_container
from kmake_tooling.toolchain.selector import BuildRequest, ResolvedBuild, resolve

log = logging.getLogger(__name__)

# make variables that choose the compiler; ccache CC/HOSTCC would override them.
_COMPILER_VARS = ("CC=", "HOSTCC=", "LLVM=")


def ccache_make_arguments(resolved: ResolvedBuild) -> list[str]:
    """CC/HOSTCC assignments routing both compilers through ccache."""
    return [f"CC=ccache {resolved.cross_compile_prefix}gcc", "HOSTCC=ccache gcc"]


def selects_compiler(args: list[str]) -> bool:
    """True if args pick the compiler themselves (CC=, HOSTCC=, LLVM=)."""
    return any(a.startswith(_COMPILER_VARS) for a in args)


def make_command(resolved: ResolvedBuild, use_ccache: bool = True) -> list[str]:
    """make argv for the container. ccache CC/HOSTCC are left out when the user picks the compiler."""
    cmd = ["make"]
    if use_ccache and not selects_compiler(resolved.make_arguments):
        cmd += ccache_make_arguments(resolved)
    cmd += resolved.make_arguments
    return cmd


def ensure_image(image: str) -> bool:
    """Docker is installed and the image exists locally; prints remediation otherwise."""
    if not docker_available():
        print("❌ docker is not installed. Please install it first.", file=sys.stderr)
        return False
    if not image_exists(image):
        print_missing_image(image)
        return False
    return True


def run_kmake(
    project_root: Path,
    argv: list[str],
    arch: str | None = None,
    cross_compile: str | None = None,
    jobs: int | None = None,
    config: dict[str, str] | None = None,
) -> int:
    """Resolve toolchain from arch/cross_compile/argv and run make in the container. Returns make's exit code, 1 if the image is missing."""
    cfg = config if config is not None else resolve_config(None)
    image = cfg["image"]
    if not ensure_image(image):
        return 1
    request = BuildRequest.from_argv(
        argv, architecture_name=arch, cross_compile_prefix=cross_compile, parallelism=jobs
    )
    resolved = resolve(request, default_arch=cfg["default_arch"])
    log.debug(
        "ARCH=%s CROSS_COMPILE=%s jobs=%d",
        resolved.architecture,
        resolved.cross_compile_prefix,
        resolved.parallelism,
    )
    prefix = resolved.cross_compile_prefix or "(native)"
    print(f"🔨 make ARCH={resolved.architecture} CROSS_COMPILE={prefix} -j{resolved.parallelism}")
    return run_in_container(
        image,
        project_root,
        cfg,
        resolved.environment,
        make_command(resolved, use_ccache=config_bool(cfg, "use_ccache")),
    )


def run_shell(
    project_root: Path,
    arch: str | None = None,
    cross_compile: str | None = None,
    config: dict[str, str] | None = None,
) -> int:
    """Interactive bash in the build container with ARCH/CROSS_COMPILE exported."""
    cfg = config if config is not None else resolve_config(None)
    image = cfg["image"]
    if not ensure_image(image):
        return 1
    resolved = resolve(
        BuildRequest(architecture_name=arch, cross_compile_prefix=cross_compile),
        default_arch=cfg["default_arch"],
    )
    return run_in_container(
        image,
        project_root,
        cfg,
        resolved.environment,
        ["bash"],
        interactive=True,
    )
