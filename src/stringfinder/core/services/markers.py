from __future__ import annotations

"""
Marker Set Service.

Loads the list of search strings into a case-insensitive lookup that
remembers the original casing of each marker for reporting.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from stringfinder.core.pipeline.components.reader import iter_text_lines
from stringfinder.domain.constants import MARKER_COMMENT_PREFIX
from stringfinder.domain.errors import MarkerSourceNotFound
from stringfinder.domain.scan_models import MarkerEntry

logger = logging.getLogger(__name__)


class MarkerSet:
    """
    Ordered, deduplicated collection of markers keyed by normalized form.

    Iteration follows definition order: the position at which a
    normalized key first appeared. A later duplicate replaces the display
    form of the earlier one without moving it.
    """

    def __init__(self, entries: Optional[Iterable[MarkerEntry]] = None):
        self._entries: Dict[str, MarkerEntry] = {}
        for entry in entries or []:
            self._entries[entry.normalized_key] = entry

    def __iter__(self) -> Iterator[MarkerEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[MarkerEntry]:
        return self._entries.get(key)

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def display_forms(self) -> List[str]:
        return [e.display_form for e in self._entries.values()]

    def matches_in(self, lowered_text: str) -> List[str]:
        """
        Return the normalized keys occurring in an already-lowercased text.

        Args:
            lowered_text: Content lowercased by the caller.

        Returns:
            List[str]: Matching keys, in definition order.
        """
        return [key for key in self._entries if key in lowered_text]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_marker_lines(lines: Iterable[str]) -> MarkerSet:
    """
    Build a MarkerSet from raw marker lines.

    Lines are trimmed; blank lines and lines starting with '#' are ignored.
    Markers are literal substrings, never patterns.

    Args:
        lines: Raw lines from the marker source.

    Returns:
        MarkerSet: The resulting marker collection.
    """
    entries: List[MarkerEntry] = []
    for raw in lines:
        text = raw.strip()
        if not text or text.startswith(MARKER_COMMENT_PREFIX):
            continue
        entries.append(MarkerEntry(normalized_key=text.lower(), display_form=text))
    return MarkerSet(entries)


def load_marker_set(path: str, encoding: str = "utf-8") -> MarkerSet:
    """
    Load markers from a plain text file, one per line.

    Args:
        path: Location of the marker list.
        encoding: Text encoding of the marker list.

    Returns:
        MarkerSet: The loaded markers.

    Raises:
        MarkerSourceNotFound: If the file is missing or unreadable.
    """
    try:
        marker_set = parse_marker_lines(iter_text_lines(path, encoding))
    except UnicodeDecodeError as e:
        raise MarkerSourceNotFound(path, f"not valid {encoding} text") from e
    except OSError as e:
        raise MarkerSourceNotFound(path, e.strerror or str(e)) from e

    logger.info(f"Loaded {len(marker_set)} markers from {path}")
    return marker_set
