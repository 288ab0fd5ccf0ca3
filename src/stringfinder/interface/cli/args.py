from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides for the pipeline.
"""

import argparse
from typing import Any, Dict

from stringfinder.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the stringfinder CLI.

    The directory and string file are optional at parse time because they
    may come from the persisted configuration; their presence is checked
    after merging.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="stringfinder",
        description=i18n.t("app.description"),
    )

    # --- Inputs ---
    p.add_argument(
        "-d", "--dir",
        dest="input_path",
        default=None,
        help=i18n.t("cli.args.dir"),
    )
    p.add_argument(
        "-s", "--stringfile",
        dest="marker_file",
        default=None,
        help=i18n.t("cli.args.stringfile"),
    )

    # --- Output ---
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help=i18n.t("cli.args.output"),
    )
    fmt_group = p.add_mutually_exclusive_group()
    fmt_group.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    fmt_group.add_argument(
        "--markdown",
        action="store_true",
        help=i18n.t("cli.args.markdown"),
    )

    # --- Expansion and decoding ---
    unzip_group = p.add_mutually_exclusive_group()
    unzip_group.add_argument(
        "-nz", "--nounzip",
        dest="skip_expansion",
        action="store_true",
        help=i18n.t("cli.args.nounzip"),
    )
    unzip_group.add_argument(
        "--unzip",
        action="store_true",
        help=i18n.t("cli.args.unzip"),
    )
    p.add_argument(
        "--ext",
        dest="archive_extension",
        default=None,
        help=i18n.t("cli.args.ext"),
    )
    p.add_argument(
        "--encoding",
        dest="encoding",
        default=None,
        help=i18n.t("cli.args.encoding"),
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Value options are always present (None when not given). Flags only
    appear when given: --nounzip and --json turn a setting on, --unzip and
    --markdown turn a persisted one back off.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "marker_file": args.marker_file,
        "output_path": args.output_path,
        "archive_extension": args.archive_extension,
        "encoding": args.encoding,
        "log_file": args.log_file,
    }

    if args.skip_expansion:
        overrides["skip_expansion"] = True
    if args.unzip:
        overrides["skip_expansion"] = False
    if args.json_output:
        overrides["json_output"] = True
    if args.markdown:
        overrides["json_output"] = False

    return overrides
