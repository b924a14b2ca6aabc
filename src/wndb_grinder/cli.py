"""
Command-line interface for the WNDB grinder.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from wndb_grinder.config import GrindConfig, load_config
from wndb_grinder.exceptions import ConfigError, WndbError
from wndb_grinder.flags import COMPAT_NAMES
from wndb_grinder.formatter import HEADERS
from wndb_grinder.grinder import OFFSETS_FILE, Grinder
from wndb_grinder.importer import load_lmf
from wndb_grinder.ordering import LegacyOrder, SenseOrderer


def main(argv: Optional[list] = None) -> int:
    """Main entry point for wndb-grind CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        config = _resolve_config(args)
    except ConfigError as e:
        print(f"\n  [CONFIG ERROR] {e}", file=sys.stderr)
        if e.line:
            print(f"                Line: {e.line}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"\n  [ERROR] {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return args.func(args, config)
    except (WndbError, FileNotFoundError) as e:
        print(f"\n  [ERROR] {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wndb-grind",
        description="Grind a WN-LMF lexical resource into WNDB flat files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s (wndb-grinder)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # grind command
    grind_parser = subparsers.add_parser(
        "grind",
        help="Write the whole WNDB database",
    )
    _add_common_arguments(grind_parser)
    grind_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output directory (default: wndb)",
    )
    grind_parser.set_defaults(func=cmd_grind)

    # offsets command
    offsets_parser = subparsers.add_parser(
        "offsets",
        help=f"Write the synset offsets map ({OFFSETS_FILE})",
    )
    _add_common_arguments(offsets_parser)
    offsets_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output directory (default: wndb)",
    )
    offsets_parser.set_defaults(func=cmd_offsets)

    # line command
    line_parser = subparsers.add_parser(
        "line",
        help="Print the data record of one synset",
    )
    line_parser.add_argument(
        "synset_id",
        help="Synset id, e.g. oewn-02958343-n",
    )
    _add_common_arguments(line_parser)
    line_parser.set_defaults(func=cmd_line)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--source", "-s",
        type=Path,
        help="WN-LMF XML file (overrides configuration)",
    )
    parser.add_argument(
        "--lexicon",
        type=str,
        help="Lexicon id when the source holds several",
    )
    parser.add_argument(
        "--compat",
        action="append",
        choices=sorted(COMPAT_NAMES),
        help="Legacy compatibility switch (repeatable)",
    )
    parser.add_argument(
        "--no-reindex",
        action="store_true",
        help="Number senses by their rank in the lexical unit",
    )
    parser.add_argument(
        "--legacy-order",
        type=Path,
        help="Legacy sense order table (sensekey rank)",
    )
    parser.add_argument(
        "--header",
        choices=sorted(HEADERS),
        help="License header of data and index files (default: oewn)",
    )
    parser.add_argument(
        "--lower-case-first",
        action="store_true",
        help="Order lower-case lemma variants before upper-case ones",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Report duplicate relations and other diagnostics",
    )


def _resolve_config(args: argparse.Namespace) -> GrindConfig:
    """Load the configuration file, then apply command-line overrides."""
    config = load_config(args.config) if args.config else GrindConfig()

    overrides = {}
    if args.source:
        overrides["source"] = args.source
    if getattr(args, "output", None):
        overrides["output"] = args.output
    if args.lexicon:
        overrides["lexicon"] = args.lexicon
    if args.compat:
        overrides["compat"] = tuple(dict.fromkeys(config.compat + tuple(args.compat)))
    if args.no_reindex:
        overrides["reindex"] = False
    if args.legacy_order:
        overrides["legacy_order"] = args.legacy_order
    if args.header:
        overrides["header"] = args.header
    if args.lower_case_first:
        overrides["upper_case_first"] = False
    if args.verbose:
        overrides["verbose"] = True
    config = dataclasses.replace(config, **overrides)

    if config.source is None:
        raise ConfigError("No source: give --source or 'source' in the configuration")
    return config


def build_grinder(config: GrindConfig) -> Grinder:
    """Load the model and set up a grinder as configured."""
    model = load_lmf(config.source, config.lexicon)
    legacy_order = LegacyOrder.load(config.legacy_order) if config.legacy_order else None
    orderer = SenseOrderer(legacy_order, upper_case_first=config.upper_case_first)
    return Grinder(
        model, config.flags, config.header_text, orderer, verbose=config.verbose,
    )


def cmd_grind(args: argparse.Namespace, config: GrindConfig) -> int:
    """Handle grind command."""
    print(f"\nGrinding {config.source} into {config.output}...")
    grinder = build_grinder(config)
    counts = grinder.grind(config.output)

    print("\nFiles:")
    for name, count in counts.items():
        print(f"  {name:<16} {count}")
    return 0


def cmd_offsets(args: argparse.Namespace, config: GrindConfig) -> int:
    """Handle offsets command."""
    grinder = build_grinder(config)
    config.output.mkdir(parents=True, exist_ok=True)
    path = config.output / OFFSETS_FILE
    count = grinder.write_offsets(path)
    print(f"\nWrote {count} offsets to {path}")
    return 0


def cmd_line(args: argparse.Namespace, config: GrindConfig) -> int:
    """Handle line command."""
    grinder = build_grinder(config)
    sys.stdout.write(grinder.line(args.synset_id))
    return 0


if __name__ == "__main__":
    sys.exit(main())
