"""CLI Interface Logic (argparse etc)"""

import argparse
import logging
from dataclasses import fields
from pathlib import Path

from slide_transitions.archive import Compression
from slide_transitions.internals.constants import SENTINEL
from slide_transitions.internals.define_config import UserConfig, parse_compression
from slide_transitions.orchestrator import run_pipeline
from slide_transitions.processing.transition_catalog import TRANSITIONS
from slide_transitions.utils import str_to_bool

log = logging.getLogger("slide_transitions")


def run(argv: list[str] | None = None) -> int:
    """Run CLI interface. Assumes startup.initialize_application() was already called.

    Returns:
        Process exit code: 0 when transitions were applied, 1 when the deck was
        passed through unchanged because it couldn't be patched.
    """
    args = parse_args(argv)

    if args.list_transitions:
        print(format_transition_catalog())
        return 0

    cfg = build_config_from_args(args)
    output_path, result = run_pipeline(cfg)

    if not result.ok:
        log.error(f"No transitions were applied: {result.error}")
        return 1

    log.info(
        f"Wrote {output_path} ({len(result.report.transitioned)} slide(s) transitioned)"
    )
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns argparse.Namespace with all the UserConfig fields as attributes.
    Validates that all config fields have corresponding CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="slide-transitions",
        description="Add slide transitions to an existing PowerPoint .pptx file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default sequence (push on slide 2, morph on slide 3, push on slide 4, ...)
  slide-transitions --input-pptx deck.pptx

  # Pick the transitions and the output file
  slide-transitions --input-pptx deck.pptx --sequence fade wipe --output-pptx deck_fx.pptx

  # Use config file, overriding one setting
  slide-transitions --config settings.toml --compression-level 9

  # See which transitions exist
  slide-transitions --list-transitions
        """,
    )

    parser.add_argument(
        "--list-transitions",
        action="store_true",
        dest="list_transitions",
        help="Print the available transition ids and exit.",
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to TOML configuration file for a pipeline run.",
    )

    # Handled at startup (see startup._check_for_cli_debug_arg); declared here so it shows in --help
    parser.add_argument(
        "--debug",
        dest="debug_mode",
        type=str_to_bool,
        metavar="BOOL",
        default=SENTINEL,
        help="Turn trace logging on or off for this run (overrides SLIDE_TRANSITIONS_DEBUG).",
    )

    # Input/Output files
    parser.add_argument(
        "--input-pptx",
        type=str,
        dest="input_pptx",
        metavar="PATH",
        help="Input PowerPoint file (.pptx file)",
    )
    parser.add_argument(
        "--output-folder",
        type=str,
        dest="output_folder",
        metavar="PATH",
        help="Folder for the output file; a timestamped name is used (default: ~/Documents/slide_transitions/output)",
    )
    parser.add_argument(
        "--output-pptx",
        type=str,
        dest="output_pptx",
        metavar="PATH",
        help="Exact output file path (takes precedence over --output-folder)",
    )

    # Processing options
    parser.add_argument(
        "--sequence",
        nargs="+",
        dest="sequence",
        metavar="ID",
        choices=list(TRANSITIONS),
        help=f"Transitions to cycle through; slide position i gets the (i mod N)th id (choices: {', '.join(TRANSITIONS)}; default: morph push)",
    )
    parser.add_argument(
        "--compression",
        type=str,
        dest="compression",
        choices=[c.value for c in Compression],
        help="Compression used when re-packing the file (default: deflated)",
    )
    parser.add_argument(
        "--compression-level",
        type=int,
        dest="compression_level",
        metavar="N",
        help="Compression level, 0-9 for deflated, 1-9 for bzip2 (default: 6)",
    )

    # Boolean flags - slide XML verification
    verify_xml_group = parser.add_mutually_exclusive_group()
    verify_xml_group.add_argument(
        "--verify-slide-xml",
        action="store_true",
        dest="verify_slide_xml",
        default=None,
        help="Parse each patched slide and leave it unchanged if it isn't well-formed",
    )
    verify_xml_group.add_argument(
        "--no-verify-slide-xml",
        action="store_false",
        dest="verify_slide_xml",
        default=None,
        help="Skip slide XML verification (default)",
    )

    # Boolean flags - output verification
    verify_output_group = parser.add_mutually_exclusive_group()
    verify_output_group.add_argument(
        "--verify-output",
        action="store_true",
        dest="verify_output",
        default=None,
        help="Re-open the result with python-pptx before saving it",
    )
    verify_output_group.add_argument(
        "--no-verify-output",
        action="store_false",
        dest="verify_output",
        default=None,
        help="Skip output verification (default)",
    )

    _validate_args_match_config(parser)

    return parser.parse_args(argv)


def build_config_from_args(args: argparse.Namespace) -> UserConfig:
    """
    Build UserConfig from parsed arguments with proper priority.

    Priority order (highest to lowest):
    1. CLI arguments (if explicitly provided)
    2. Config file values (if --config provided)
    3. UserConfig defaults
    """
    if args.config:
        config_path = Path(args.config)
        log.info(f"Loading config from {config_path}")
        cfg = UserConfig.from_toml(config_path)
    else:
        cfg = UserConfig()

    # argparse leaves every option at None unless it was given on the command line
    if args.input_pptx is not None:
        cfg.input_pptx = Path(args.input_pptx)
    if args.output_folder is not None:
        cfg.output_folder = Path(args.output_folder)
    if args.output_pptx is not None:
        cfg.output_pptx = Path(args.output_pptx)
    if args.sequence is not None:
        cfg.sequence = list(args.sequence)
    if args.compression is not None:
        cfg.compression = parse_compression(args.compression)
    if args.compression_level is not None:
        cfg.compression_level = args.compression_level
    if args.verify_slide_xml is not None:
        cfg.verify_slide_xml = args.verify_slide_xml
    if args.verify_output is not None:
        cfg.verify_output = args.verify_output

    cfg.validate()

    return cfg


def format_transition_catalog() -> str:
    """One line per catalog entry, for --list-transitions."""
    lines = []
    for transition_id, definition in TRANSITIONS.items():
        fallback = " (has fallback)" if definition.has_fallback else ""
        lines.append(f"{transition_id:<8} {definition.description}{fallback}")
    return "\n".join(lines)


def _validate_args_match_config(parser: argparse.ArgumentParser) -> None:
    """
    Ensure all UserConfig fields have corresponding CLI arguments, and vice versa.

    Raises:
        RuntimeError: If there's a mismatch between config fields and CLI args
    """
    config_fields = {f.name for f in fields(UserConfig)}

    # CLI-only options with no config field behind them
    excluded_args = {"help", "config", "list_transitions", "debug_mode"}
    arg_names = {
        action.dest for action in parser._actions if action.dest not in excluded_args
    }

    missing_in_args = config_fields - arg_names
    extra_in_args = arg_names - config_fields

    if missing_in_args:
        log.error(
            "UserConfig fields must have corresponding arg added to cli.parse_args()."
        )
        raise RuntimeError(
            f"CLI arguments missing for UserConfig fields: {missing_in_args}\n"
            "These config fields need corresponding arguments added to parse_args()"
        )

    if extra_in_args:
        log.error(
            "Found CLI args that don't match any UserConfig field. Either add the field to UserConfig, "
            "or add the arg to excluded_args in _validate_args_match_config() if it's CLI-only."
        )
        raise RuntimeError(
            f"CLI arguments don't match UserConfig fields: {extra_in_args}\n"
            "Either remove these CLI args or add corresponding fields to UserConfig"
        )


def main() -> None:
    """Development entry point - run CLI directly with `python -m slide_transitions.cli`"""
    from slide_transitions import startup

    log = startup.initialize_application()
    try:
        raise SystemExit(run())
    except Exception:
        log.exception("Fatal error in CLI")
        raise


if __name__ == "__main__":
    main()
