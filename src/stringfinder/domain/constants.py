from __future__ import annotations

"""
Domain Constants.

Centralizes the static values shared by the expansion, scanning and
reporting layers: the archive container extension, the marker file
comment convention and configuration versioning.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

APP_DIR_NAME = "StringFinder"
UNIX_APP_DIR_NAME = ".stringfinder"
CONFIG_FILE_NAME = "config.json"

DEFAULT_ARCHIVE_EXTENSION = ".zip"
DEFAULT_ENCODING = "utf-8"

# Marker source conventions
MARKER_COMMENT_PREFIX = "#"

# Report headings
REPORT_TITLE = "# Scan Results"
REPORT_FOUND_HEADING = "## Strings found in files"
REPORT_NOT_FOUND_HEADING = "## Strings not found"
