"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of RevtreeConfig to/from TOML format.
"""

import os
import platform
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from revtree.domain.config import RevtreeConfig

LOCAL_CONFIG_NAME = ".revtree.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/revtree/config.toml or ~/.config/revtree/config.toml
    - Windows: %APPDATA%/revtree/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "revtree" / "config.toml"
        return Path.home() / ".config" / "revtree" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "revtree" / "config.toml"
        return Path.home() / ".config" / "revtree" / "config.toml"


def get_local_config_path(project_dir: Path) -> Path:
    """Get the project-local config path inside project_dir."""
    return project_dir / LOCAL_CONFIG_NAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_to_data(config: RevtreeConfig) -> dict[str, Any]:
    """Convert a RevtreeConfig to plain TOML-serializable data."""
    return {
        "git": {
            "executable": config.git.executable,
            "verify_remote": config.git.verify_remote,
        },
        "clone": {
            "temp_prefix": config.clone.temp_prefix,
        },
        "tags": {
            "select": config.tags.select,
        },
    }


def dump_config(config: RevtreeConfig) -> str:
    """Render configuration as TOML text."""
    return tomli_w.dumps(config_to_data(config))


def create_default_config_file(path: Path) -> None:
    """Create a default config file with comments.

    Args:
        path: Destination path
    """
    # We use a template string to preserve comments and formatting
    template = """\
# revtree configuration
# Created by: revtree config init

[git]
# git binary to run
executable = "git"

# Ping the origin remote when opening a local repository
verify_remote = true

[clone]
# Prefix of the temporary directory remote repositories are cloned into
temp_prefix = "revtree"

[tags]
# Baseline tag for 'revtree defaults':
# "latest" (highest semver tag) or "earliest" (lowest semver tag)
select = "latest"
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(template)
