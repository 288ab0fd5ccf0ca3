from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate a
scan run outcome between the pipeline engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from stringfinder.domain.scan_models import FoundMarker

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete scan run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_path: Normalized root directory scanned.
        marker_file: Normalized path of the marker list.
        skip_expansion: Whether the archive expansion phase was bypassed.
        expanded: True if at least one archive was newly expanded.
        found: Markers with at least one matching file, in definition order.
        not_found: Display forms of markers never matched, in definition order.
        summary: Technical execution statistics.
    """
    ok: bool
    error: str

    input_path: str
    marker_file: str
    skip_expansion: bool

    expanded: bool = False
    found: List[FoundMarker] = field(default_factory=list)
    not_found: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a failed pipeline result. Failed runs never carry match data.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        input_path=cfg.get("input_path", ""),
        marker_file=cfg.get("marker_file", ""),
        skip_expansion=bool(cfg.get("skip_expansion", False)),
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        found: List[FoundMarker],
        not_found: List[str],
        expanded: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a successful pipeline result.

    Args:
        cfg: Final configuration used during execution.
        found: Found view produced by the aggregator.
        not_found: Not-found view produced by the aggregator.
        expanded: Diagnostic flag returned by the archive expander.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        input_path=cfg.get("input_path", ""),
        marker_file=cfg.get("marker_file", ""),
        skip_expansion=bool(cfg.get("skip_expansion", False)),
        expanded=expanded,
        found=list(found),
        not_found=list(not_found),
        summary=summary_extra or {},
    )
