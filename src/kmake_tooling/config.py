"""kmake configuration: defaults, optional .kmake.yaml, environment overrides.

Config YAML format (all keys optional, unknown keys ignored):
- image: build-environment image reference
- default_arch: ARCH used when none is given (native build)
- dockerfile: environment Dockerfile path (relative to project root)
- workdir: container mount point of the source tree
- ccache_dir / ccache_container_dir: host and container cache directories
- ccache_maxsize, ccache_compresslevel: passed as CCACHE_MAXSIZE / CCACHE_COMPRESSLEVEL
- cpus, memory: docker run --cpus / --memory (omitted when empty)
- use_ccache: wrap CC with ccache
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".kmake.yaml"

DEFAULT_CONFIG: dict[str, str] = {
    "image": "kmake-builder:latest",
    "default_arch": "arm64",
    "dockerfile": "docker/Dockerfile",
    "workdir": "/src",
    "ccache_dir": ".ccache",
    "ccache_container_dir": "/ccache",
    "ccache_maxsize": "20G",
    "ccache_compresslevel": "6",
    "cpus": "",
    "memory": "",
    "use_ccache": "true",
}

# env var -> config key; applied after the config file.
ENV_OVERRIDES: dict[str, str] = {
    "KMAKE_IMAGE": "image",
    "KMAKE_DEFAULT_ARCH": "default_arch",
    "KMAKE_CCACHE_DIR": "ccache_dir",
    "CCACHE_MAXSIZE": "ccache_maxsize",
    "CCACHE_COMPRESSLEVEL": "ccache_compresslevel",
    "KMAKE_CPUS": "cpus",
    "KMAKE_MEMORY": "memory",
}


class ConfigError(ValueError):
    """Config file could not be read or is not a mapping."""


def _as_str(v: Any) -> str:
    # YAML turns `use_ccache: false` into a bool; keep the text form lowercase.
    if isinstance(v, bool):
        return "true" if v else "false"
    if v is None:
        return ""
    return str(v)


def resolve_config(overrides: dict[str, Any] | None) -> dict[str, str]:
    """Return config dict with defaults filled. Unknown keys are dropped."""
    if overrides is None:
        return dict(DEFAULT_CONFIG)
    out = dict(DEFAULT_CONFIG)
    out.update({k: _as_str(v) for k, v in overrides.items() if k in out})
    return out


def config_bool(config: dict[str, str], key: str) -> bool:
    return config.get(key, "").strip().lower() in ("1", "true", "yes", "on")


def load_config(
    project_root: Path,
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> dict[str, str]:
    """Load .kmake.yaml from project_root (or config_path) and apply env overrides.

    A missing default file is fine; a missing explicit config_path is an error.
    Raises ConfigError for unreadable or malformed files.
    """
    env = os.environ if environ is None else environ
    path = config_path or (project_root / CONFIG_FILE_NAME)
    data: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open() as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            msg = f"Could not read config {path}: {e}"
            raise ConfigError(msg) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            msg = f"Config {path} must be a mapping, got {type(loaded).__name__}"
            raise ConfigError(msg)
        unknown = sorted(k for k in loaded if k not in DEFAULT_CONFIG)
        if unknown:
            log.debug("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
        data = loaded
    elif config_path is not None:
        msg = f"Config file not found: {config_path}"
        raise ConfigError(msg)

    config = resolve_config(data)
    for var, key in ENV_OVERRIDES.items():
        val = env.get(var)
        if val:
            config[key] = val
    return config


def ccache_host_dir(project_root: Path, config: dict[str, str]) -> Path:
    """Host ccache directory; relative paths are under project_root, ~ is expanded."""
    p = Path(config["ccache_dir"]).expanduser()
    return p if p.is_absolute() else project_root / p
