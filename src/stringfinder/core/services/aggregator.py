from __future__ import annotations

"""
Match Aggregation Service.

Accumulates (marker, file) matches for a single run and derives the two
report views. Ordering of markers in both views always follows the
marker set, never the order in which files were scanned.
"""

from typing import Dict, List

from stringfinder.core.services.markers import MarkerSet
from stringfinder.domain.scan_models import FoundMarker


class MatchAggregator:
    """
    Per-run mapping from normalized marker key to the files containing it.

    Paths are kept with set semantics and insertion order (a dict used as
    an ordered set).
    """

    def __init__(self, marker_set: MarkerSet):
        self._marker_set = marker_set
        self._results: Dict[str, Dict[str, None]] = {}

    def record(self, key: str, path: str) -> bool:
        """
        Record that a file contains a marker.

        Args:
            key: Normalized marker key.
            path: Absolute path of the matching file.

        Returns:
            bool: False if the pair was already recorded.
        """
        paths = self._results.setdefault(key, {})
        if path in paths:
            return False
        paths[path] = None
        return True

    def paths_for(self, key: str) -> List[str]:
        return list(self._results.get(key, {}))

    def found_view(self) -> List[FoundMarker]:
        """Markers with at least one recorded file, in definition order."""
        view: List[FoundMarker] = []
        for entry in self._marker_set:
            paths = self._results.get(entry.normalized_key)
            if paths:
                view.append(FoundMarker(display_form=entry.display_form, paths=list(paths)))
        return view

    def not_found_view(self) -> List[str]:
        """Display forms of markers never recorded, in definition order."""
        return [
            entry.display_form
            for entry in self._marker_set
            if not self._results.get(entry.normalized_key)
        ]

    @property
    def total_matches(self) -> int:
        return sum(len(p) for p in self._results.values())
