from __future__ import annotations

"""
Logging Handler Factories.

Builds the concrete handlers behind the queue listener and tags them so
that reconfiguration only removes handlers this package installed.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from stringfinder.infra.fs import ensure_parent_dir

_HANDLER_TAG_ATTR: str = "_stringfinder_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as owned by stringfinder."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    """Create the stderr handler used for operator-facing messages."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Create a RotatingFileHandler for the diagnostic log.

    A log file that cannot be opened must not prevent a scan from
    running, so the failure is written to stderr and None is returned.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Formatter applied to records.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of rotated files kept.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None if it could not be opened.
    """
    try:
        ensure_parent_dir(log_file)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
