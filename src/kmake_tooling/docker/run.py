"""Assemble and execute `docker run` for the build container."""

from __future__ import annotations

import subprocess
from pathlib import Path

from kmake_tooling.config import ccache_host_dir
from kmake_tooling.docker.image import host_ids


def ccache_environment(config: dict[str, str]) -> dict[str, str]:
    """CCACHE_* variables passed through to the container."""
    return {
        "CCACHE_DIR": config["ccache_container_dir"],
        "CCACHE_MAXSIZE": config["ccache_maxsize"],
        "CCACHE_COMPRESSLEVEL": config["ccache_compresslevel"],
    }


def docker_run_command(
    image: str,
    project_root: Path,
    config: dict[str, str],
    environment: dict[str, str],
    command: list[str],
    interactive: bool = False,
) -> list[str]:
    """Build the docker run argv. environment is passed unchanged, after the ccache variables."""
    uid, gid = host_ids()
    workdir = config["workdir"]
    cache = ccache_host_dir(project_root, config)
    cmd = ["docker", "run", "--rm"]
    if interactive:
        cmd.append("-it")
    cmd += [
        "-u",
        f"{uid}:{gid}",
        "-v",
        f"{project_root}:{workdir}",
        "-w",
        workdir,
        "-v",
        f"{cache}:{config['ccache_container_dir']}",
    ]
    env = {**ccache_environment(config), **environment}
    for name, value in env.items():
        cmd += ["-e", f"{name}={value}"]
    if config.get("cpus"):
        cmd += ["--cpus", config["cpus"]]
    if config.get("memory"):
        cmd += ["--memory", config["memory"]]
    cmd.append(image)
    cmd += command
    return cmd


def run_in_container(
    image: str,
    project_root: Path,
    config: dict[str, str],
    environment: dict[str, str],
    command: list[str],
    interactive: bool = False,
) -> int:
    """Run command in the build container. Returns the container's exit code."""
    ccache_host_dir(project_root, config).mkdir(parents=True, exist_ok=True)
    cmd = docker_run_command(
        image, project_root, config, environment, command, interactive=interactive
    )
    return subprocess.run(cmd, cwd=str(project_root)).returncode
