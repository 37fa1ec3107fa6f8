"""Command-line interface for bibsift."""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import FilterConfig
from .exceptions import BibsiftError, FileOperationError
from .merge import OPERATIONS
from .model import Document
from .parser import parse, parse_file
from .schema import check_document
from .select import filter_entries
from .serialize import to_json, write_string
from .types import OutputFormat


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging for the CLI application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s:%(lineno)d – %(message)s",
    )


def read_document(bibfile: str | None) -> Document:
    """Parse a .bib file, or standard input when no file (or ``-``) is given."""
    if bibfile is None or bibfile == "-":
        return parse(sys.stdin.buffer.read())
    return parse_file(Path(bibfile))


def write_output(document: Document, outfile: str | None, output_format: OutputFormat) -> None:
    """Write entries as BibTeX or JSON to a file, or to standard output."""
    if output_format == "json":
        text = to_json(document).decode("utf-8") + "\n"
    else:
        text = write_string(document)

    if outfile is None or outfile == "-":
        sys.stdout.write(text)
        return

    try:
        Path(outfile).write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileOperationError(f"Failed to write {outfile}: {e}") from e


def cmd_filter(args: argparse.Namespace) -> None:
    """Pretty print a BibTeX file, keeping only selected entry types."""
    logger = logging.getLogger(__name__)

    try:
        config = FilterConfig.from_file(Path(args.config)) if args.config else FilterConfig()
        config = config.override(args.include, args.exclude, args.format)

        document = read_document(args.bibfile)
        selected = filter_entries(document, config.include, config.exclude)
        write_output(selected, args.outfile, config.output_format)

        logger.info(f"✓ Kept {len(selected)} of {len(document)} entries")
        sys.exit(0)

    except BibsiftError as e:
        logger.error(f"Filter error: {e}")
        sys.exit(1)


def cmd_merge(args: argparse.Namespace) -> None:
    """Combine two BibTeX files with a set operation."""
    logger = logging.getLogger(__name__)

    try:
        first = parse_file(Path(args.bibfile1))
        second = parse_file(Path(args.bibfile2))

        merged = OPERATIONS[args.operation](first, second)
        write_output(merged, args.output, args.format)

        logger.info(
            f"✓ {args.operation}: {len(first)} + {len(second)} entries -> {len(merged)} entries"
        )
        sys.exit(0)

    except BibsiftError as e:
        logger.error(f"Merge error: {e}")
        sys.exit(1)


def cmd_check(args: argparse.Namespace) -> None:
    """Report entries that lack fields expected for their type."""
    logger = logging.getLogger(__name__)

    try:
        document = read_document(args.bibfile)
    except BibsiftError as e:
        logger.error(f"Check error: {e}")
        sys.exit(1)

    report = check_document(document)
    if report:
        logger.warning(f"{len(report)} of {len(document)} entries have advisory problems")

    # Advisory problems never change the exit status
    sys.exit(0)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bibsift",
        description="Parse, filter and merge BibTeX files.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for INFO, -vv for DEBUG)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # filter subcommand
    filter_parser = subparsers.add_parser(
        "filter", help="Pretty print a BibTeX file, optionally filtering by entry type"
    )
    filter_parser.add_argument("bibfile", nargs="?", help="Input .bib file (default: stdin)")
    filter_parser.add_argument("outfile", nargs="?", help="Output file (default: stdout)")
    filter_parser.add_argument(
        "--include",
        type=str,
        help="Comma-separated list of entry types to include (default: standard types)",
    )
    filter_parser.add_argument(
        "--exclude", type=str, help="Comma-separated list of entry types to exclude"
    )
    filter_parser.add_argument(
        "--config", type=str, help="JSON file with include/exclude/format settings"
    )
    filter_parser.add_argument(
        "--format", choices=["bibtex", "json"], default=None, help="Output format (default: bibtex)"
    )
    filter_parser.set_defaults(func=cmd_filter)

    # merge subcommand
    merge_parser = subparsers.add_parser(
        "merge", help="Combine two BibTeX files with a set operation"
    )
    merge_parser.add_argument("bibfile1", help="First .bib file")
    merge_parser.add_argument("bibfile2", help="Second .bib file")
    operation = merge_parser.add_mutually_exclusive_group(required=True)
    for flag, help_text in (
        ("join", "Entries found in either file"),
        ("diff", "Entries of the first file missing from the second"),
        ("intersect", "Entries found in both files"),
        ("exclusive", "Entries found in exactly one file (symmetric difference)"),
    ):
        operation.add_argument(
            f"--{flag}", dest="operation", action="store_const", const=flag, help=help_text
        )
    merge_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    merge_parser.add_argument(
        "--format", choices=["bibtex", "json"], default="bibtex", help="Output format"
    )
    merge_parser.set_defaults(func=cmd_merge)

    # check subcommand
    check_parser = subparsers.add_parser(
        "check", help="Report entries missing fields expected for their type"
    )
    check_parser.add_argument("bibfile", nargs="?", help="Input .bib file (default: stdin)")
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the bibsift CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging based on verbosity
    setup_logging(args.verbose)

    # Handle case where no subcommand is provided
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    # Execute the subcommand
    args.func(args)


if __name__ == "__main__":
    main()
