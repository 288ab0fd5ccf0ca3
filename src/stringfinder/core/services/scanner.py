from __future__ import annotations

"""
Tree Scanning Service.

Walks an (already expanded) directory tree and matches the content of
every non-archive file against the marker set, feeding matches into the
run's aggregator.
"""

import logging
import os
from typing import Iterator

from stringfinder.core.pipeline.components.reader import read_file_text
from stringfinder.core.services.aggregator import MatchAggregator
from stringfinder.core.services.expander import is_archive
from stringfinder.core.services.markers import MarkerSet
from stringfinder.domain.constants import DEFAULT_ARCHIVE_EXTENSION, DEFAULT_ENCODING
from stringfinder.domain.errors import ContentReadError
from stringfinder.domain.scan_models import ScanStats

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def iter_tree_files(start_path: str) -> Iterator[str]:
    """
    Yield the absolute path of every file below a directory, in sorted order.

    A start path that is itself a file yields just that file. A missing
    start path yields nothing.

    Args:
        start_path: Directory (or file) to walk.

    Yields:
        str: Absolute file paths.

    Raises:
        ContentReadError: A directory below the start cannot be listed.
    """
    start_abs = os.path.abspath(start_path)

    if not os.path.exists(start_abs):
        return

    if os.path.isfile(start_abs):
        yield start_abs
        return

    for root, dirs, files in os.walk(start_abs, onerror=_raise_walk_error):
        dirs.sort()
        files.sort()
        for file_name in files:
            yield os.path.join(root, file_name)


def _raise_walk_error(err: OSError) -> None:
    """os.walk error hook: an unlistable directory aborts the scan."""
    raise ContentReadError(err.filename or "", err.strerror or str(err)) from err


def scan_file(
        file_path: str,
        marker_set: MarkerSet,
        aggregator: MatchAggregator,
        encoding: str = DEFAULT_ENCODING,
) -> int:
    """
    Match one file against all markers.

    Args:
        file_path: Absolute path of the file.
        marker_set: Markers to look for.
        aggregator: Receives one record per matched marker.
        encoding: Text encoding of the file.

    Returns:
        int: Number of markers found in the file.

    Raises:
        ContentReadError: If the file cannot be read or decoded.
    """
    content = read_file_text(file_path, encoding).lower()
    matched = marker_set.matches_in(content)
    for key in matched:
        aggregator.record(key, file_path)
    return len(matched)


def scan(
        directory: str,
        marker_set: MarkerSet,
        aggregator: MatchAggregator,
        extension: str = DEFAULT_ARCHIVE_EXTENSION,
        encoding: str = DEFAULT_ENCODING,
) -> ScanStats:
    """
    Scan every non-archive file below a directory for markers.

    Archive files are containers, not content: they are skipped and
    assumed to be expanded into sibling directories already. A start
    path that does not exist is a silent no-op.

    Args:
        directory: Root of the tree to scan.
        marker_set: Markers to look for.
        aggregator: Match accumulator owned by the current run.
        extension: Archive container extension.
        encoding: Text encoding used to read files.

    Returns:
        ScanStats: Counters for the walk.

    Raises:
        ContentReadError: On the first unreadable file (aborts the scan).
    """
    stats = ScanStats()

    if not os.path.exists(directory):
        logger.debug(f"Scan path does not exist, nothing to do: {directory}")
        return stats

    for file_path in iter_tree_files(directory):
        if is_archive(os.path.basename(file_path), extension):
            stats.archives_skipped += 1
            continue

        if not os.path.isfile(file_path):
            # Broken symlinks, sockets, fifos
            logger.debug(f"Skipping non-regular file: {file_path}")
            continue

        stats.matches_recorded += scan_file(file_path, marker_set, aggregator, encoding)
        stats.files_scanned += 1

    logger.info(
        f"Scanned {stats.files_scanned} files "
        f"({stats.archives_skipped} archives skipped, {stats.matches_recorded} matches)"
    )
    return stats
