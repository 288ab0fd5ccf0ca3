from __future__ import annotations

"""
Configuration Validation Stage.

Normalizes the configuration dictionary before a run: coerces types,
injects defaults for missing keys, resolves paths and canonicalizes the
archive extension. Untrusted values come from the CLI and from the
persisted config file.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from stringfinder.domain.config import get_default_config
from stringfinder.domain.constants import DEFAULT_ARCHIVE_EXTENSION, DEFAULT_ENCODING
from stringfinder.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_STRING_FIELDS = [
    "input_path", "marker_file", "output_path",
    "archive_extension", "encoding", "log_file"
]
_BOOL_FIELDS = ["skip_expansion", "json_output"]
_PATH_FIELDS = ["input_path", "marker_file", "output_path", "log_file"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: strict mode and a value of the wrong type.
        ValueError: strict mode and an invalid extension or encoding.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in _PATH_FIELDS:
        merged[field] = normalize_path(merged[field])

    merged["archive_extension"] = _normalize_extension(merged["archive_extension"], warnings, strict)
    merged["encoding"] = _normalize_encoding(merged["encoding"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce booleans, 0/1 and human-friendly strings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, warnings: List[str], strict: bool) -> str:
    """Lowercase the archive extension and ensure the leading dot."""
    e = ext.strip().lower()
    if not e or e == ".":
        if strict:
            raise ValueError(f"Invalid archive extension '{ext}'.")
        warnings.append(f"Empty archive extension replaced by '{DEFAULT_ARCHIVE_EXTENSION}'.")
        return DEFAULT_ARCHIVE_EXTENSION
    if not e.startswith("."):
        if strict:
            raise ValueError(f"Invalid archive extension '{ext}': must start with '.'.")
        warnings.append(f"Archive extension '{ext}' corrected to '.{e}'.")
        e = "." + e
    return e


def _normalize_encoding(encoding: str, warnings: List[str], strict: bool) -> str:
    """Reject encodings unknown to the codec registry."""
    if not encoding:
        return DEFAULT_ENCODING
    try:
        codecs.lookup(encoding)
    except LookupError:
        if strict:
            raise ValueError(f"Unknown encoding '{encoding}'.")
        warnings.append(f"Unknown encoding '{encoding}' replaced by '{DEFAULT_ENCODING}'.")
        return DEFAULT_ENCODING
    return encoding
