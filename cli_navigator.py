#!/usr/bin/env python3
"""
CLI runner for PDF TOC discovery.

Prints the navigation menu of a PDF, optionally with its printed page map.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import Settings
from core.exceptions import NavigatorError
from navigator.entry_points import navigator_main


def print_menu(nodes, indent: int = 0):
    """Print menu nodes as an indented tree."""
    for node in nodes:
        if node['page'] is None:
            target = "(no target)"
        elif node['page_kind'] == 'printed':
            target = f"p. {node['page']}"
        else:
            target = f"page {node['page']}"
        print(f"{'  ' * indent}- {node['title']}  [{target}]")
        print_menu(node['children'], indent + 1)


def print_printed_pages(printed_pages):
    """Print the printed-to-physical page table."""
    print("\nPrinted page numbers:")
    for physical, info in printed_pages.items():
        printed = info['printed'] if info['printed'] is not None else '-'
        print(f"  page {physical:>4} -> printed {printed:>4}  ({info['source']})")


def run(pdf_path: str, settings: Settings, as_json: bool = False, show_pages: bool = False) -> int:
    """Extract and print a document's TOC."""
    if not as_json:
        print("=" * 60)
        print(f"Processing: {pdf_path}")
        print("=" * 60)

    try:
        result = navigator_main(pdf_path, settings)
    except NavigatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    toc = result['toc']
    print(f"Total pages: {result['page_count']}")
    print(f"TOC source: {toc['source']} ({toc['status']})")
    if toc['message']:
        print(toc['message'])
    print()
    print_menu(toc['menu'])

    if show_pages and result['printed_pages']:
        print_printed_pages(result['printed_pages'])

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Build a navigable table of contents for a PDF"
    )
    parser.add_argument("pdf_path", help="Path to PDF file")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--show-pages", action="store_true", help="Print the printed page map")
    parser.add_argument(
        "--ocr-backend",
        choices=["tesseract", "vllm", "none"],
        help="OCR engine (default: from settings)"
    )
    parser.add_argument("--ocr-language", help="OCR language, e.g. eng")
    parser.add_argument(
        "--no-printed-pages",
        action="store_true",
        help="Skip printed page detection and use the offset heuristic"
    )
    parser.add_argument("--timeout", type=float, help="Load timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    overrides = {}
    if args.ocr_backend:
        overrides['ocr_backend'] = args.ocr_backend
    if args.ocr_language:
        overrides['ocr_language'] = args.ocr_language
    if args.no_printed_pages:
        overrides['resolve_printed_pages'] = False
    if args.timeout is not None:
        overrides['load_timeout'] = args.timeout

    settings = Settings(**overrides)
    sys.exit(run(args.pdf_path, settings, as_json=args.json, show_pages=args.show_pages))


if __name__ == "__main__":
    main()
