from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration resolution (defaults,
persisted file, command-line overrides), logging bootstrap, pipeline
execution and report output. Diagnostics go to stderr; only the report
is written to stdout, so the output can be redirected safely.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from stringfinder.core.pipeline.components.writer import (
    render_json_report,
    render_markdown_report,
    write_report,
)
from stringfinder.core.pipeline.engine import run_pipeline
from stringfinder.core.pipeline.stages.validator import validate_config
from stringfinder.domain.config import get_default_config, load_config, save_config
from stringfinder.domain.pipeline_models import PipelineResult
from stringfinder.infra.logging import LoggingConfig, configure_logging, get_logger
from stringfinder.interface.cli import args as cli_args
from stringfinder.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].

    Returns:
        int: 0 on success, 1 when the run aborts, 2 on invalid invocation,
             130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve configuration (defaults or persisted state, then overrides)
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    logging_conf = LoggingConfig(
        level="DEBUG" if args.debug else "INFO",
        console=True,
        log_file=clean_conf["log_file"] or None,
    )
    configure_logging(logging_conf)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        try:
            saved_to = save_config(clean_conf)
        except OSError as e:
            msg = i18n.t("cli.errors.save_fail", error=str(e))
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_FAILURE
        logger.info(i18n.t("cli.status.config_saved", path=saved_to))

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 3. Required parameters
    if not clean_conf["input_path"] or not clean_conf["marker_file"]:
        if args.save_config:
            # Saving the configuration alone is a complete invocation
            return EXIT_OK
        parser.print_usage(sys.stderr)
        print(f"ERROR: {i18n.t('cli.errors.missing_required')}", file=sys.stderr)
        return EXIT_USAGE

    # 4. Run
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        # Filesystem failures outside the domain taxonomy (permissions, disk full)
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    if not result.ok:
        print(f"ERROR: {i18n.t('cli.errors.pipeline_fail', error=result.error)}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Report
    return _emit_report(result, clean_conf)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides into the base configuration.

    Only keys known to the base are merged.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _emit_report(result: PipelineResult, cfg: Dict[str, Any]) -> int:
    """Render the result in the configured format and write it out."""
    if cfg["json_output"]:
        text = render_json_report(result.found, result.not_found)
    else:
        text = render_markdown_report(result.found, result.not_found)

    output_path = cfg["output_path"]
    try:
        destination = write_report(text, output_path)
    except OSError as e:
        msg = i18n.t("cli.errors.write_fail", path=output_path, error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    if output_path:
        logger.info(i18n.t("cli.status.report_written", path=destination))

    summary = result.summary
    logger.info(i18n.t(
        "cli.status.done",
        found=summary.get("markers_found", 0),
        total=summary.get("markers", 0),
        files=summary.get("files_scanned", 0),
    ))
    return EXIT_OK

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
