"""Build-environment image: presence check and local build."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

from kmake_tooling.docker.generate_dockerfile import generate_dockerfile


def docker_available() -> bool:
    return shutil.which("docker") is not None


def image_exists(image: str) -> bool:
    """True if `docker images -q <image>` lists the image locally."""
    r = subprocess.run(
        ["docker", "images", "-q", image],
        capture_output=True,
        text=True,
    )
    return r.returncode == 0 and bool(r.stdout and r.stdout.strip())


def host_ids() -> tuple[int, int]:
    """(uid, gid) of the invoking user; 1000:1000 where the platform has no getuid."""
    getuid = getattr(os, "getuid", None)
    getgid = getattr(os, "getgid", None)
    if getuid is None or getgid is None:
        return 1000, 1000
    return getuid(), getgid()


def print_missing_image(image: str) -> None:
    print(f"❌ Build image {image} not found", file=sys.stderr)
    print("   Build it first with: kmake image build", file=sys.stderr)


def build_image(
    project_root: Path,
    image: str,
    dockerfile: str = "docker/Dockerfile",
    dry_run: bool = False,
    uid: int | None = None,
    gid: int | None = None,
    workdir: str = "/src",
    ccache_dir: str = "/ccache",
) -> int:
    """Build the environment image with the host uid/gid baked in. Generates the Dockerfile if missing. Returns 0 or 1."""
    df = Path(dockerfile)
    if not df.is_absolute():
        df = project_root / df
    if not df.exists():
        print(f"📦 {df} not found, generating it")
        generate_dockerfile(project_root, output_path=df, workdir=workdir, ccache_dir=ccache_dir)

    host_uid, host_gid = host_ids()
    uid = host_uid if uid is None else uid
    gid = host_gid if gid is None else gid
    cmd = [
        "docker",
        "build",
        "-f",
        str(df),
        "-t",
        image,
        "--build-arg",
        f"USER_UID={uid}",
        "--build-arg",
        f"USER_GID={gid}",
        str(df.parent),
    ]
    if dry_run:
        print(f"[dry-run] would: {' '.join(cmd)}")
        return 0
    if not docker_available():
        print("❌ docker is not installed. Please install it first.", file=sys.stderr)
        return 1
    r = subprocess.run(cmd, cwd=str(project_root))
    if r.returncode != 0:
        print("❌ docker build failed", file=sys.stderr)
        return 1
    print(f"✅ Built: {image}")
    return 0


def run_check(image: str) -> int:
    """Report whether the image is present. Returns 0 if present, 1 otherwise."""
    if not docker_available():
        print("❌ docker is not installed. Please install it first.", file=sys.stderr)
        return 1
    if not image_exists(image):
        print_missing_image(image)
        return 1
    print(f"✅ Found: {image}")
    return 0
