"""
Command-line interface for DESFrame.

Provides commands for parsing and exporting XMD automata.

:return : CLI commands.
:return: Main entry point for command-line usage.
"""

import argparse
import logging
import sys
from pathlib import Path
from desframe.integration.pm4py_adapter import (
    export_automaton_to_csv,
    export_automaton_to_json,
    export_automaton_to_pnml,
)
from desframe.sources.io import load_xmd
from desframe.xmd.parser import ParseConfig, log_record


def _load(args: argparse.Namespace):
    config = ParseConfig(
        identifier_policy="skip" if args.skip_malformed else "fail",
        validate_integrity=not args.no_validate,
    )
    observer = log_record if args.verbose else None
    return load_xmd(args.file, config=config, observer=observer)


def cmd_parse(args: argparse.Namespace) -> None:
    """
    Parse an XMD file and print a model summary.

    :param args: Command-line arguments.
    :return : None.
    :return: Side-effect of parsing and printing.
    """
    print(f"Parsing XMD file: {args.file}")
    automaton = _load(args)

    print(f"States: {automaton.num_states}")
    print(f"Events: {automaton.num_events}")
    print(f"Transitions: {automaton.num_transitions}")
    initial = ", ".join(str(s) for s in automaton.initial_states) or "none"
    print(f"Initial state(s): {initial}")

    if args.out_json:
        Path(args.out_json).parent.mkdir(parents=True, exist_ok=True)
        export_automaton_to_json(automaton, args.out_json)
        print(f"Exported automaton to: {args.out_json}")


def cmd_export(args: argparse.Namespace) -> None:
    """
    Export an XMD automaton to PNML and/or CSV.

    :param args: Command-line arguments.
    :return : None.
    :return: Side-effect of export.
    """
    if not args.out_pnml and not args.out_csv:
        raise ValueError("Nothing to export: pass --out-pnml and/or --out-csv")

    automaton = _load(args)

    if args.out_pnml:
        Path(args.out_pnml).parent.mkdir(parents=True, exist_ok=True)
        export_automaton_to_pnml(automaton, args.out_pnml)
        print(f"Exported Petri net to: {args.out_pnml}")

    if args.out_csv:
        Path(args.out_csv).parent.mkdir(parents=True, exist_ok=True)
        export_automaton_to_csv(automaton, args.out_csv)
        print(f"Exported transition table to: {args.out_csv}")


def _add_parse_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to .xmd file")
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Skip elements with malformed identifiers instead of failing",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Allow duplicate identifiers and dangling transition references",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose output")


def main(argv=None) -> None:
    """
    Main entry point for CLI.

    :return : None.
    :return: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="DESFrame: XMD discrete-event automaton reader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse an XMD file")
    _add_parse_options(parse_parser)
    parse_parser.add_argument("--out-json", help="Output automaton JSON file path")

    export_parser = subparsers.add_parser("export", help="Export an XMD automaton")
    _add_parse_options(export_parser)
    export_parser.add_argument("--out-pnml", help="Output PNML file path")
    export_parser.add_argument("--out-csv", help="Output transition table CSV path")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.command == "parse":
            cmd_parse(args)
        elif args.command == "export":
            cmd_export(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
