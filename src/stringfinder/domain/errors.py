from __future__ import annotations

"""
Domain Error Taxonomy.

Every fatal condition of a scan run maps to one of these exceptions.
Each carries the offending filesystem path so the interface layer can
report it to the operator. None of them is retried.
"""


class StringFinderError(Exception):
    """
    Base class for all run-aborting errors.

    Attributes:
        path: Filesystem path the failure relates to.
        reason: Optional low-level detail (usually the wrapped exception text).
    """

    def __init__(self, message: str, path: str = "", reason: str = ""):
        super().__init__(message)
        self.path = path
        self.reason = reason


class InvalidInvocation(StringFinderError):
    """Required parameters (scan directory, marker file) are missing."""

    def __init__(self, missing: str):
        super().__init__(f"Missing required parameter: {missing}")
        self.missing = missing


class MarkerSourceNotFound(StringFinderError):
    """The marker list file is missing or cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        msg = f"Marker file not found or unreadable: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, path, reason)


class InputNotDirectory(StringFinderError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"Input is not a directory: {path}", path)


class ArchiveReadError(StringFinderError):
    """An archive cannot be opened, is corrupt or uses an unsupported feature."""

    def __init__(self, path: str, reason: str = ""):
        msg = f"Cannot read archive: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, path, reason)


class PathTraversalViolation(StringFinderError):
    """
    An archive entry would be written outside its extraction target.

    Attributes:
        entry_name: Raw entry name as stored in the archive.
        target_dir: Directory the archive was being expanded into.
    """

    def __init__(self, entry_name: str, target_dir: str, archive_path: str = ""):
        super().__init__(
            f"Entry is outside of the target dir: {entry_name} (target: {target_dir})",
            archive_path or target_dir,
        )
        self.entry_name = entry_name
        self.target_dir = target_dir


class ContentReadError(StringFinderError):
    """A file could not be read or decoded as text during scanning."""

    def __init__(self, path: str, reason: str = ""):
        msg = f"Cannot read file content: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, path, reason)
