from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates a complete scan run:
1. Validates configuration and paths.
2. Loads the marker set.
3. Expands archives (unless the caller asked to scan the tree as-is).
4. Scans the tree into a fresh aggregator.
5. Packs the found / not-found views into a PipelineResult.

The run is all-or-nothing: the first domain error aborts it and no
match data is returned.
"""

import logging
import os
from typing import Any, Dict, Optional

from stringfinder.core.pipeline.stages.validator import validate_config
from stringfinder.core.services.aggregator import MatchAggregator
from stringfinder.core.services.expander import expand
from stringfinder.core.services.markers import load_marker_set
from stringfinder.core.services.scanner import scan
from stringfinder.domain.errors import InputNotDirectory, InvalidInvocation, StringFinderError
from stringfinder.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)

logger = logging.getLogger(__name__)


def run_pipeline(config: Optional[Dict[str, Any]]) -> PipelineResult:
    """
    Execute a full scan run.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        PipelineResult: Status, both report views and run statistics.
    """
    logger.debug("Pipeline execution started.")

    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    try:
        result = _execute(cfg)
    except StringFinderError as e:
        logger.error(str(e))
        return create_error_result(str(e), cfg, summary_extra={"failed_path": e.path})

    logger.debug("Pipeline completed successfully.")
    return result


def _execute(cfg: Dict[str, Any]) -> PipelineResult:
    """Run every stage; domain errors propagate to run_pipeline."""
    input_path = cfg["input_path"]
    marker_file = cfg["marker_file"]
    extension = cfg["archive_extension"]
    encoding = cfg["encoding"]

    if not input_path:
        raise InvalidInvocation("input_path")
    if not marker_file:
        raise InvalidInvocation("marker_file")

    # Markers first: a missing marker file aborts before any disk work
    marker_set = load_marker_set(marker_file, encoding)

    if not os.path.isdir(input_path):
        raise InputNotDirectory(input_path)

    expanded = False
    if cfg["skip_expansion"]:
        logger.info("Archive expansion skipped; scanning the tree as-is.")
    else:
        expanded = expand(input_path, extension)
        if not expanded:
            logger.info("No new archives to expand.")

    aggregator = MatchAggregator(marker_set)
    stats = scan(input_path, marker_set, aggregator, extension, encoding)

    found = aggregator.found_view()
    not_found = aggregator.not_found_view()

    summary = {
        "markers": len(marker_set),
        "markers_found": len(found),
        "markers_not_found": len(not_found),
        "files_scanned": stats.files_scanned,
        "archives_skipped": stats.archives_skipped,
        "matches": aggregator.total_matches,
        "expanded": expanded,
    }

    return create_success_result(cfg, found, not_found, expanded=expanded, summary_extra=summary)
