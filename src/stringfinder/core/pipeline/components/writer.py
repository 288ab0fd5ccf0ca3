from __future__ import annotations

"""
Report Rendering and Output.

Turns the aggregator views into a Markdown (or JSON) report and writes
it to a file or to standard output.
"""

import json
import sys
from typing import Dict, List

from stringfinder.domain.constants import (
    REPORT_FOUND_HEADING,
    REPORT_NOT_FOUND_HEADING,
    REPORT_TITLE,
)
from stringfinder.domain.scan_models import FoundMarker
from stringfinder.infra.fs import ensure_parent_dir

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------

def render_markdown_report(found: List[FoundMarker], not_found: List[str]) -> str:
    """
    Render the scan results as Markdown.

    Output Format:
    # Scan Results
    ## Strings found in files
    ### <marker> followed by one bullet per file
    ## Strings not found
    one bullet per marker

    Args:
        found: Found view, in marker definition order.
        not_found: Not-found view, in marker definition order.

    Returns:
        str: The report text, newline terminated.
    """
    lines: List[str] = [REPORT_TITLE, "", REPORT_FOUND_HEADING, ""]

    for marker in found:
        lines.append(f"### {marker.display_form}")
        lines.append("")
        lines.extend(f"- {path}" for path in marker.paths)
        lines.append("")

    lines.append(REPORT_NOT_FOUND_HEADING)
    lines.append("")
    lines.extend(f"- {display}" for display in not_found)

    return "\n".join(lines) + "\n"


def render_json_report(found: List[FoundMarker], not_found: List[str]) -> str:
    """Render the scan results as a JSON document (marker order preserved)."""
    payload: Dict[str, object] = {
        "found": {m.display_form: list(m.paths) for m in found},
        "not_found": list(not_found),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def write_report(text: str, output_path: str = "") -> str:
    """
    Write a rendered report.

    Args:
        text: Report content.
        output_path: Target file; empty means standard output.

    Returns:
        str: The file written to, or "<stdout>".

    Raises:
        OSError: If the output file cannot be written.
    """
    if not output_path:
        sys.stdout.write(text)
        sys.stdout.flush()
        return "<stdout>"

    ensure_parent_dir(output_path)
    with open(output_path, "w", encoding="utf-8") as out:
        out.write(text)
    return output_path
