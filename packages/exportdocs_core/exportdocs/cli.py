"""
Command-line interface for exportdocs.

Usage:
    exportdocs render record.json --kind annexure --output out.pdf
    exportdocs render record.json --kind purchase_order --assets-dir ./public
    exportdocs version
"""

import argparse
import json
import sys
from pathlib import Path

from .assemblers import ASSEMBLERS
from .exceptions import ExportDocsError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="exportdocs",
        description="Render export trade documents to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  exportdocs render record.json --kind trade_invoice
  exportdocs render record.json --kind annexure -o annexure.pdf --strict
  exportdocs version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a JSON record to PDF")
    render_parser.add_argument("input", help="JSON file holding the resolved record")
    render_parser.add_argument("-k", "--kind", choices=sorted(ASSEMBLERS), required=True, help="Document kind")
    render_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: the document's standard file name in the current directory)",
    )
    render_parser.add_argument("--assets-dir", help="Directory with letterhead and signature images")
    render_parser.add_argument("--strict", action="store_true", help="Reject malformed dates and numbers")
    render_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def cmd_render(args) -> int:
    """Handle render command."""
    from .api import document_filename, load_record, render_document
    from .assets import DocumentAssets
    from .config import RenderConfig
    from .utils.logger import configure_logging

    configure_logging(args.log_level)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Error: {input_path} is not valid JSON: {exc}", file=sys.stderr)
        return 1

    config = RenderConfig(strict=args.strict)
    assets = DocumentAssets.from_directory(args.assets_dir) if args.assets_dir else None
    try:
        record = load_record(args.kind, data, config)
        pdf = render_document(args.kind, record, assets=assets, config=config)
    except ExportDocsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    output_path = Path(args.output) if args.output else Path(document_filename(args.kind, record.number))
    output_path.write_bytes(pdf)
    print(f"Saved: {output_path} ({len(pdf):,} bytes)")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__

    print(f"exportdocs v{__version__}")
    return 0


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        return cmd_render(args)
    if args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
