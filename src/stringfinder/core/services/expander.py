from __future__ import annotations

"""
Archive Expansion Service.

Recursively unpacks ZIP archives found in a directory tree into sibling
directories named after the archive (``X.zip`` -> ``X``), including
archives nested inside freshly unpacked ones.

The sibling directory doubles as the idempotence marker: an archive whose
target already exists is never expanded again, so repeated runs over the
same tree only do new work.
"""

import logging
import os
import shutil
import zipfile
import zlib
from typing import List, Optional

from stringfinder.domain.constants import DEFAULT_ARCHIVE_EXTENSION
from stringfinder.domain.errors import (
    ArchiveReadError,
    ContentReadError,
    InputNotDirectory,
    PathTraversalViolation,
)
from stringfinder.infra.fs import is_within_directory

logger = logging.getLogger(__name__)

# Failures raised by zipfile/zlib while decompressing a member
_MEMBER_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,  # unsupported compression method
    RuntimeError,  # encrypted member without password
)


# ==============================================================================
# CLASSIFICATION
# ==============================================================================

def is_archive(file_name: str, extension: str = DEFAULT_ARCHIVE_EXTENSION) -> bool:
    """
    Tell whether a file name denotes an archive container.

    The extension is compared case-insensitively. A name made only of the
    extension (".zip") has no stem to expand into and is not an archive.

    Args:
        file_name: Base name of the file.
        extension: Container extension including the leading dot.

    Returns:
        bool: True for archive containers.
    """
    ext = extension.lower()
    return len(file_name) > len(ext) and file_name.lower().endswith(ext)


def expansion_target(archive_path: str, extension: str = DEFAULT_ARCHIVE_EXTENSION) -> str:
    """
    Compute the directory an archive expands into: its path minus the extension.

    Only the trailing extension is removed, so ``a.zip.d/b.zip`` maps to
    ``a.zip.d/b``.
    """
    return archive_path[: -len(extension)]


# ==============================================================================
# EXTRACTION
# ==============================================================================

def extract_archive(archive_path: str, target_dir: str) -> int:
    """
    Extract every entry of a ZIP archive into a target directory.

    Each entry destination is validated before anything is created for it.
    On a path traversal attempt extraction stops; entries written so far
    stay on disk.

    Args:
        archive_path: Path of the ZIP file.
        target_dir: Directory to extract into (created if missing).

    Returns:
        int: Number of file entries written.

    Raises:
        ArchiveReadError: The archive cannot be opened, a member cannot be read
            or an entry cannot be written (e.g. a file and a directory share a name).
        PathTraversalViolation: An entry resolves outside target_dir.
    """
    try:
        zf = zipfile.ZipFile(archive_path)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
        raise ArchiveReadError(archive_path, str(e)) from e

    written = 0
    with zf:
        try:
            os.makedirs(target_dir, exist_ok=True)
        except OSError as e:
            raise ArchiveReadError(archive_path, f"target '{target_dir}': {e.strerror or e}") from e

        for info in zf.infolist():
            dest = _safe_destination(target_dir, info, archive_path)
            if dest is None:
                continue

            try:
                if info.is_dir():
                    os.makedirs(dest, exist_ok=True)
                    continue

                os.makedirs(os.path.dirname(dest), exist_ok=True)
                with zf.open(info) as src, open(dest, "wb") as out:
                    shutil.copyfileobj(src, out)
            except _MEMBER_READ_ERRORS as e:
                raise ArchiveReadError(archive_path, f"entry '{info.filename}': {e}") from e
            except OSError as e:
                raise ArchiveReadError(
                    archive_path, f"entry '{info.filename}': {e.strerror or e}"
                ) from e
            written += 1

    logger.debug(f"Extracted {written} files from {archive_path}")
    return written


def _safe_destination(
        target_dir: str,
        info: zipfile.ZipInfo,
        archive_path: str
) -> Optional[str]:
    """
    Resolve the destination of an entry, rejecting anything outside the target.

    Returns None for a directory entry that designates the target itself
    (e.g. "./"), which requires no write.
    """
    dest = os.path.join(target_dir, info.filename)

    if is_within_directory(target_dir, dest):
        return dest

    if info.is_dir() and os.path.realpath(dest) == os.path.realpath(target_dir):
        return None

    logger.error(f"Blocked path traversal in {archive_path}: '{info.filename}'")
    raise PathTraversalViolation(info.filename, target_dir, archive_path)


# ==============================================================================
# TREE EXPANSION
# ==============================================================================

def expand(root_dir: str, extension: str = DEFAULT_ARCHIVE_EXTENSION) -> bool:
    """
    Expand every archive below a directory, nested archives included.

    Traversal is depth-first over an explicit worklist. Sub-directories are
    always visited (directory symlinks are not followed). An archive whose
    target already exists is skipped; a freshly expanded target is queued
    so the archives inside it are expanded too.

    Args:
        root_dir: Directory to process.
        extension: Archive container extension.

    Returns:
        bool: True if at least one archive was newly expanded.

    Raises:
        InputNotDirectory: root_dir is not a directory.
        ArchiveReadError: An archive is unreadable or cannot be extracted (aborts the walk).
        ContentReadError: A directory of the tree cannot be listed.
        PathTraversalViolation: An archive tried to escape its target.
    """
    if not os.path.isdir(root_dir):
        raise InputNotDirectory(root_dir)

    did_work = False
    pending: List[str] = [os.path.abspath(root_dir)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ContentReadError(current, e.strerror or str(e)) from e

        to_visit: List[str] = []
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                to_visit.append(entry.path)
                continue

            if not (entry.is_file() and is_archive(entry.name, extension)):
                continue

            target = expansion_target(entry.path, extension)
            if os.path.lexists(target):
                logger.debug(f"Already expanded, skipping: {entry.path}")
                continue

            logger.info(f"Expanding {entry.path}")
            extract_archive(entry.path, target)
            did_work = True
            to_visit.append(target)

        # Reversed so the first child is processed next
        pending.extend(reversed(to_visit))

    return did_work
