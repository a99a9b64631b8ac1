"""Configuration loading for cargo-gccrs."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from errors import ConfigError


GLOBAL_CONFIG_DIR = Path.home() / ".cargo-gccrs"
GLOBAL_CONFIG_PATH = GLOBAL_CONFIG_DIR / "config.toml"

# Environment variables read by cargo-gccrs
CONFIG_PATH_VAR = "CARGO_GCCRS_CONFIG"
VERBOSE_VAR = "CARGO_GCCRS_VERBOSE"
GCCRS_EXTRA_ARGS = "GCCRS_EXTRA_ARGS"
AR_EXTRA_ARGS = "AR_EXTRA_ARGS"


# ======================================================================
# Data classes
# ======================================================================

@dataclass
class GlobalConfig:
    gccrs_path: str = "gccrs"
    ar_path: str = "ar"
    keep_objects: bool = False
    verbose: bool = False


# ======================================================================
# Loading
# ======================================================================

def config_path() -> Path:
    """Return the config file to read, honoring CARGO_GCCRS_CONFIG."""
    override = os.environ.get(CONFIG_PATH_VAR)
    if override:
        return Path(override)
    return GLOBAL_CONFIG_PATH


def _section(data: dict, name: str, path: Path) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(path, f"'{name}' must be a table")
    return section


def _value(section: dict, key: str, kind: type, default, path: Path):
    """Return section[key] checked against kind, or default when absent."""
    value = section.get(key.rsplit(".", 1)[-1], default)
    if not isinstance(value, kind):
        raise ConfigError(path, f"'{key}' must be a {kind.__name__}")
    return value


def load_global_config(path: Optional[Path] = None) -> GlobalConfig:
    """Load ~/.cargo-gccrs/config.toml, returning defaults if not found."""
    cfg = GlobalConfig()
    path = path or config_path()

    if path.exists():
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(path, str(e)) from e

        tools = _section(data, "tools", path)
        cfg.gccrs_path = _value(tools, "tools.gccrs", str, cfg.gccrs_path, path)
        cfg.ar_path = _value(tools, "tools.ar", str, cfg.ar_path, path)

        build = _section(data, "build", path)
        cfg.keep_objects = _value(build, "build.keep_objects", bool,
                                  cfg.keep_objects, path)
        cfg.verbose = _value(build, "build.verbose", bool, cfg.verbose, path)

    # Environment overrides the file
    if os.environ.get(VERBOSE_VAR, "") not in ("", "0"):
        cfg.verbose = True

    return cfg


def env_args(var: str) -> list[str]:
    """Fetch the extra arguments given by the user in an environment variable.

    The value is split on whitespace; an unset variable means no arguments.
    """
    return os.environ.get(var, "").split()
