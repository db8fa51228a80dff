"""Cross-platform path resolution for user directories.

Uses platformdirs to find OS-appropriate locations for:
- Logs (where slide_transitions.log lives)
- Output (default save location for patched decks)
- Configs (saved TOML settings)
- Manifests (one JSON record per run)
"""

import os
from pathlib import Path

from platformdirs import user_documents_dir

PACKAGE_NAME = "slide_transitions"


# region user_base_dir
def user_base_dir() -> Path:
    """
    Base directory for all slide_transitions user files.

    Returns:
        Path to ~/Documents/slide_transitions/ (or OS equivalent)
    """
    base = Path(user_documents_dir()) / PACKAGE_NAME
    base.mkdir(parents=True, exist_ok=True)
    return base


# endregion


def _subdir(name: str) -> Path:
    path = user_base_dir() / name
    path.mkdir(parents=True, exist_ok=True)
    return path


# region user dirs
def user_log_dir_path() -> Path:
    """~/Documents/slide_transitions/logs/"""
    return _subdir("logs")


def user_output_dir() -> Path:
    """Default output directory for patched decks: ~/Documents/slide_transitions/output/"""
    return _subdir("output")


def user_configs_dir() -> Path:
    """~/Documents/slide_transitions/configs/"""
    return _subdir("configs")


def user_manifests_dir() -> Path:
    """~/Documents/slide_transitions/manifests/"""
    return _subdir("manifests")


# endregion


# region resolve_path
def resolve_path(raw: str | Path) -> Path:
    """
    Expand ~ and ${VARS}; resolve to absolute path.

    Relative paths resolve relative to current working directory.
    """
    expanded = os.path.expandvars(str(raw))
    return Path(expanded).expanduser().resolve()


# endregion
