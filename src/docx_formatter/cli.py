from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import FormatterError
from .export import write_export
from .models import FormattingOptions
from .pipeline import load_document
from .settings import get_settings
from .text import load_proper_nouns


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Normalize the structure of a DOCX file (headings, captions, code blocks) and report on it."
    )
    parser.add_argument("docx_path", help="Path to the DOCX file to format.")
    parser.add_argument(
        "--no-headings",
        action="store_true",
        help="Do not sentence-case and strip styling from headings.",
    )
    parser.add_argument(
        "--no-captions",
        action="store_true",
        help='Do not add the "Fig:" prefix to image captions.',
    )
    parser.add_argument(
        "--no-code-blocks",
        action="store_true",
        help="Do not label code blocks.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result (content and analysis) as JSON.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Write <name>_formatted.html into this directory.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation for JSON output.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def print_summary(result) -> None:
    analysis = result.analysis
    counts = analysis.heading_counts
    print(f"File: {result.content.file_name}")
    print(
        f"Headers: H1->H2 {counts.h1}, H2 {counts.h2}, H3 {counts.h3}, "
        f"H4 {counts.h4}, H5+->H4 {counts.h5_plus}"
    )
    print(f"Images: {analysis.total_images} ({analysis.images_without_links} without links)")
    print(f"Code blocks: {analysis.code_block_count}")
    if analysis.issues:
        print("Potential issues:")
        for issue in analysis.issues:
            print(f"  - {issue}")
    else:
        print("No issues detected")


def main(args: Optional[argparse.Namespace] = None) -> int:
    args = args or parse_args()
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    options = FormattingOptions(
        standardize_headings=not args.no_headings,
        add_caption_prefix=not args.no_captions,
        preserve_code_blocks=not args.no_code_blocks,
    )
    try:
        proper_nouns = load_proper_nouns(settings.proper_nouns_path) if settings.proper_nouns_path else None
        result = load_document(
            args.docx_path,
            options,
            proper_nouns=proper_nouns,
            max_file_size=settings.max_file_size,
        )
        if args.json:
            print(result.to_json(indent=args.indent))
        else:
            print_summary(result)
        if args.output_dir:
            target = write_export(result.content.formatted.html, result.content.file_name, args.output_dir)
            print(f"Wrote {target}", file=sys.stderr)
    except FileNotFoundError as exc:
        print(f"error: no such file: {exc.filename or args.docx_path}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc.strerror or exc}: {exc.filename or args.docx_path}", file=sys.stderr)
        return 1
    except FormatterError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
