"""Docker helpers: generate the build-environment Dockerfile, build/check the image, run the build container."""

from .generate_dockerfile import generate_dockerfile
from .generate_dockerfile import run as run_generate_dockerfile
from .image import build_image, image_exists
from .image import run_check as run_image_check
from .run import docker_run_command, run_in_container

__all__ = [
    "build_image",
    "docker_run_command",
    "generate_dockerfile",
    "image_exists",
    "run_generate_dockerfile",
    "run_image_check",
    "run_in_container",
]
