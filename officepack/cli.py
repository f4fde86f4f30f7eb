"""CLI entry point for officepack.

Orchestrates the pipeline: content loading or parsing, package generation,
QA validation, and writing the result.

Usage::

    # A presentation from inline slide texts
    python -m officepack.cli pptx --slides "Intro;Results;Next steps" \\
        --output out/deck.pptx

    # A presentation from a text or YAML content file
    python -m officepack.cli pptx --from-file talk.txt

    # A spreadsheet from a CSV file
    python -m officepack.cli xlsx --csv data/people.csv -o out/people.xlsx

    # A spreadsheet from inline rows
    python -m officepack.cli xlsx --data "Name,Age|Ana,30|"

    # A free-text request in the command mini-language
    python -m officepack.cli command "criar planilha dados: Nome,Idade|Ana,30|"

    # Validate an existing package
    python -m officepack.cli validate --file out/deck.pptx

Without ``--output`` a file named ``<kind>_<uuid>.<ext>`` is written to
``--output-dir`` (default: the current directory).
"""

import argparse
import sys
from pathlib import Path

import yaml

from officepack.generator.document import build_document, unique_filename
from officepack.package.errors import OfficePackError
from officepack.processor.commands import (
    DEFAULT_ROWS,
    DEFAULT_SLIDES,
    parse_command,
    split_rows,
    split_slides,
)
from officepack.processor.ingestion import ingest, read_rows_csv
from officepack.qa.validator import PackageValidator
from officepack.schema.models import DocumentContent, DocumentKind


# ---------------------------------------------------------------------------
# Content loading
# ---------------------------------------------------------------------------

def _load_file(path, expected: DocumentKind) -> DocumentContent:
    """Read --from-file content and check it is the right kind."""
    p = Path(path)
    if not p.exists():
        _error(f"Content file not found: {p}")
    try:
        content = ingest(p)
    except (ValueError, yaml.YAMLError) as exc:
        _error(f"Could not read {p}: {exc}")
    if content.kind != expected:
        _error(f"{p} holds {content.kind.value} content, "
               f"expected {expected.value}")
    return content


def _presentation_content(args) -> DocumentContent:
    """Slide texts from --slides / --from-file, else the default outline."""
    if args.slides is not None:
        return DocumentContent.presentation(split_slides(args.slides))
    if args.from_file:
        _info(f"Reading slides from {args.from_file}")
        return _load_file(args.from_file, DocumentKind.PRESENTATION)
    _warn("No slides specified; using the default outline")
    return DocumentContent.presentation(DEFAULT_SLIDES)


def _spreadsheet_content(args) -> DocumentContent:
    """Rows from --data / --csv / --from-file, else the sample table."""
    if args.data is not None:
        return DocumentContent.spreadsheet(split_rows(args.data))
    if args.csv:
        p = Path(args.csv)
        if not p.exists():
            _error(f"CSV file not found: {p}")
        _info(f"Reading rows from {p}")
        try:
            rows = read_rows_csv(p)
        except ValueError as exc:
            # pandas ParserError and UnicodeDecodeError are both ValueErrors
            _error(f"Could not read {p}: {exc}")
        return DocumentContent.spreadsheet(rows)
    if args.from_file:
        _info(f"Reading rows from {args.from_file}")
        return _load_file(args.from_file, DocumentKind.SPREADSHEET)
    _warn("No data specified; using the sample table")
    return DocumentContent.spreadsheet(DEFAULT_ROWS)


# ---------------------------------------------------------------------------
# Shared generate pipeline
# ---------------------------------------------------------------------------

def _generate(content: DocumentContent, args) -> Path:
    """Build, optionally validate, and write a package.  Returns the path."""
    if content.kind == DocumentKind.PRESENTATION:
        _info(f"Building PPTX ({len(content.slides)} slide(s))...")
    else:
        _info(f"Building XLSX ({len(content.rows)} row(s))...")

    try:
        blob = build_document(content)
    except OfficePackError as exc:
        _error(f"Generation failed: {exc}")

    if not args.skip_qa:
        _info("Running QA validation...")
        qa_result = PackageValidator().validate(blob)
        if qa_result.passed:
            _info(qa_result.summary())
        else:
            _warn(qa_result.summary())
            if args.verbose:
                print(qa_result.report(), file=sys.stderr)
            if not args.force:
                _error("QA validation failed. Use --force to write anyway, "
                       "or --skip-qa to skip validation.")
    else:
        _info("QA validation skipped (--skip-qa)")

    if args.output:
        output = Path(args.output)
    else:
        output = Path(args.output_dir) / unique_filename(content.kind)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(blob)
    _info(f"Written: {output} ({len(blob):,} bytes)")
    return output


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_pptx(args):
    """Generate a PPTX presentation."""
    _generate(_presentation_content(args), args)


def cmd_xlsx(args):
    """Generate an XLSX spreadsheet."""
    _generate(_spreadsheet_content(args), args)


def cmd_command(args):
    """Parse a free-text request and generate what it asks for."""
    try:
        parsed = parse_command(args.text)
    except ValueError as exc:
        _error(str(exc))
    if parsed.used_defaults:
        _warn(f"No content in request; using the default "
              f"{parsed.kind.value} content")
    _generate(parsed.content, args)


def cmd_validate(args):
    """Validate an existing package."""
    path = Path(args.file)
    if not path.exists():
        _error(f"Package file not found: {path}")

    _info(f"Validating {path}")
    qa_result = PackageValidator().validate(path.read_bytes())

    print(qa_result.report())
    sys.exit(0 if qa_result.passed else 1)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="officepack",
        description="Generate minimal .pptx and .xlsx packages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- pptx ----
    pptx = subparsers.add_parser(
        "pptx",
        help="Generate a presentation, one slide per text.",
    )
    source = pptx.add_mutually_exclusive_group()
    source.add_argument(
        "--slides",
        help='Slide texts separated by ";" (e.g. "Intro;Body;End").',
    )
    source.add_argument(
        "--from-file",
        dest="from_file",
        help="Text file (one slide per line) or YAML content file.",
    )
    _add_output_args(pptx)
    pptx.set_defaults(func=cmd_pptx)

    # ---- xlsx ----
    xlsx = subparsers.add_parser(
        "xlsx",
        help="Generate a single-sheet spreadsheet.",
    )
    source = xlsx.add_mutually_exclusive_group()
    source.add_argument(
        "--data",
        help='Rows terminated by "|", cells separated by "," '
             '(e.g. "Name,Age|Ana,30|").',
    )
    source.add_argument(
        "--csv",
        help="CSV file (UTF-8, or UTF-16 LE tab-delimited).",
    )
    source.add_argument(
        "--from-file",
        dest="from_file",
        help="CSV or YAML content file.",
    )
    _add_output_args(xlsx)
    xlsx.set_defaults(func=cmd_xlsx)

    # ---- command ----
    cmd = subparsers.add_parser(
        "command",
        help="Generate from a free-text request "
             "('criar apresentação slides: ...', 'criar planilha dados: ...').",
    )
    cmd.add_argument("text", help="The request text.")
    _add_output_args(cmd)
    cmd.set_defaults(func=cmd_command)

    # ---- validate ----
    val = subparsers.add_parser(
        "validate",
        help="Validate an existing .pptx / .xlsx package.",
    )
    val.add_argument(
        "--file",
        required=True,
        help="Path to the package to validate.",
    )
    val.set_defaults(func=cmd_validate)

    return parser


def _add_output_args(parser):
    """Add output and QA args to a generating subparser."""
    parser.add_argument(
        "-o", "--output",
        help="Output file path (default: <kind>_<uuid>.<ext> in --output-dir).",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=".",
        help="Directory for generated files when --output is not given.",
    )
    parser.add_argument(
        "--skip-qa",
        action="store_true",
        default=False,
        help="Skip QA validation after generation.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Write output even if QA validation fails.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show detailed output (full QA report on failure).",
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
