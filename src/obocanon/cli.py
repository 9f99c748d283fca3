"""
Command line interface for the canonical OBO writer.

Commands:
- normalize: Rewrite an OBO file in canonical form
- check: Exit with status 1 when a file is not already canonical
- report: Print document diagnostics
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from obocanon import __version__
from obocanon.analyzer import DocumentReport, analyze_document
from obocanon.backends.obo_writer import write_document, write_document_to_file, write_document_to_string
from obocanon.config import ConfigError, WriterOptions, load_writer_options
from obocanon.formatter import MalformedClauseError
from obocanon.model import DuplicateFrameError
from obocanon.parser import OBOParseError, parse_obo_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_CANONICAL = 1
EXIT_ERROR = 2


def _load_options(config_path: Optional[str]) -> WriterOptions:
    if config_path is None:
        return WriterOptions()
    logger.debug(f"Loading writer options from {config_path}")
    return load_writer_options(config_path)


def cmd_normalize(args: argparse.Namespace) -> int:
    options = _load_options(args.config)
    document = parse_obo_file(args.input)
    if args.in_place:
        write_document_to_file(document, args.input, options)
    elif args.output:
        write_document_to_file(document, args.output, options)
    else:
        write_document(document, sys.stdout, options)
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    options = _load_options(args.config)
    original = Path(args.input).read_text(encoding="utf-8")
    document = parse_obo_file(args.input)
    canonical = write_document_to_string(document, options)
    if original == canonical:
        print(f"{args.input}: canonical")
        return EXIT_OK
    print(f"{args.input}: not canonical")
    return EXIT_NOT_CANONICAL


def print_report(report: DocumentReport, source: str) -> None:
    """Pretty-print a DocumentReport."""
    print(f"Document report: {source}")
    print(f"  Terms:      {report.total_terms}")
    print(f"  Typedefs:   {report.total_typedefs}")
    print(f"  Instances:  {report.total_instances}")
    print(f"  Clauses:    {report.total_clauses}")
    if report.tag_usage:
        print("  Tag usage:")
        for tag, count in sorted(report.tag_usage.items()):
            print(f"    {tag}: {count}")
    for _, _, msg in report.malformed_clauses:
        print(f"  Malformed: {msg}")
    if report.warnings:
        print("  Warnings:")
        for w in report.warnings:
            print(f"    - {w}")
    else:
        print("  No warnings")


def cmd_report(args: argparse.Namespace) -> int:
    document = parse_obo_file(args.input)
    report = analyze_document(document)
    print_report(report, args.input)
    return EXIT_OK if report.is_writable else EXIT_NOT_CANONICAL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obocanon",
        description="Canonical, byte-stable writer for OBO ontology files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize = subparsers.add_parser("normalize", help="Rewrite a file in canonical form")
    normalize.add_argument("input", help="Path to the OBO file")
    target = normalize.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", help="Write to this path instead of stdout")
    target.add_argument("--in-place", action="store_true", help="Replace the input file")
    normalize.add_argument("--config", help="YAML file with writer options")
    normalize.set_defaults(func=cmd_normalize)

    check = subparsers.add_parser("check", help="Exit 1 if the file is not canonical")
    check.add_argument("input", help="Path to the OBO file")
    check.add_argument("--config", help="YAML file with writer options")
    check.set_defaults(func=cmd_check)

    report = subparsers.add_parser("report", help="Print document diagnostics")
    report.add_argument("input", help="Path to the OBO file")
    report.set_defaults(func=cmd_report)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OBOParseError, MalformedClauseError, DuplicateFrameError, ConfigError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
