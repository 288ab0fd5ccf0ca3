from __future__ import annotations

"""
Scan Domain Data Models.

Defines the value objects exchanged between the marker loader, the tree
scanner, the match aggregator and the report writer.
"""

from dataclasses import dataclass, field
from typing import List

# -----------------------------------------------------------------------------
# MARKERS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MarkerEntry:
    """
    A single search string.

    Attributes:
        normalized_key: Lowercased form used for matching and deduplication.
        display_form: Original casing used in reports.
    """
    normalized_key: str
    display_form: str

# -----------------------------------------------------------------------------
# RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FoundMarker:
    """
    A marker together with every file it was found in.

    Attributes:
        display_form: Marker text as declared in the marker source.
        paths: Absolute file paths, in discovery order.
    """
    display_form: str
    paths: List[str] = field(default_factory=list)


@dataclass
class ScanStats:
    """Counters collected during a tree scan."""
    files_scanned: int = 0
    archives_skipped: int = 0
    matches_recorded: int = 0
