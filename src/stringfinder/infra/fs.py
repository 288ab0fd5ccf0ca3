from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, the per-user data directory lookup and the
containment check that guards archive extraction against path traversal.
"""

import os
from typing import Optional

from stringfinder.domain.constants import APP_DIR_NAME, UNIX_APP_DIR_NAME

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(create: bool = True) -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/StringFinder
    - Linux/Mac: ~/.stringfinder

    Args:
        create: Create the directory if it does not exist yet.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    if create:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError:
            # Read-only home: callers fall back to defaults
            pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and the user home shortcut.
    Returns an empty string when both the input and the fallback are empty,
    so that "not provided" stays distinguishable from "current directory".

    Args:
        path: Raw input path string.
        fallback: Value used when the input is empty.

    Returns:
        str: Normalized absolute path, or "".
    """
    p = (path or "").strip() or (fallback or "").strip()
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# CONTAINMENT API
# -----------------------------------------------------------------------------

def is_within_directory(base_dir: str, candidate: str) -> bool:
    """
    Check that a path resolves to a strict descendant of a directory.

    Both paths are resolved (symlinks, '..' segments) before comparison.
    The base directory itself is NOT considered within.

    Args:
        base_dir: Directory that must contain the candidate.
        candidate: Path to check.

    Returns:
        bool: True if candidate lives below base_dir.
    """
    base_real = os.path.realpath(base_dir)
    cand_real = os.path.realpath(candidate)
    prefix = base_real if base_real.endswith(os.sep) else base_real + os.sep
    return cand_real.startswith(prefix)


def ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy of a target file."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)
