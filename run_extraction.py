#!/usr/bin/env python3
"""
Documentation extraction entry point.

Parses C++ sources with libclang, collects every class, struct, function and
method carrying a documentation comment, and writes one JSON object per
entity to a JSONL file.

Usage:
    python run_extraction.py --source ./src
    python run_extraction.py --source include/widget.hpp --output-file out/docs.jsonl
    python run_extraction.py --source ./src --arg=-std=c++17 --arg=-Iinclude
"""

import argparse
import json
import logging
import os
import sys
import time

from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="C++ Documentation Extraction via libclang",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extraction.py --source ./src\n"
            "  python run_extraction.py --source ./src --arg=-std=c++17 --arg=-Iinclude\n"
        )
    )

    parser.add_argument(
        "--source",
        required=True,
        help="C++ file or directory to extract documentation from."
    )
    parser.add_argument(
        "--repo-root",
        default=None,
        help="Root used for the relative paths recorded in the output."
    )
    parser.add_argument(
        "--output-file",
        default="output/docs.jsonl",
        help="Path for the JSONL output. Default: output/docs.jsonl"
    )
    parser.add_argument(
        "--arg",
        dest="arguments",
        action="append",
        default=None,
        help=(
            "Raw compiler flag passed to libclang (repeatable). "
            "When given, replaces the default '-xc++ -std=c++20'."
        )
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def write_jsonl(entities, output_file: str) -> int:
    """Write entity dictionaries to ``output_file``, one per line.

    Returns:
        Number of lines written.
    """
    parent = os.path.dirname(os.path.abspath(output_file))
    os.makedirs(parent, exist_ok=True)

    lines_written = 0
    with open(output_file, "w", encoding="utf-8") as f:
        for entity in entities:
            f.write(json.dumps(entity, ensure_ascii=False) + "\n")
            lines_written += 1
    return lines_written


def main(argv=None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    from clangdoc import ClangDocError
    from extraction.extractor import extract_to_dict_list

    logger.info("Run %s: extracting documentation from %s", run_id, args.source)

    try:
        t0 = time.time()
        entities = extract_to_dict_list(args.source, args.repo_root, args.arguments)
        lines = write_jsonl(entities, args.output_file)
        logger.info(
            "Wrote %d entities to %s in %.2fs",
            lines,
            args.output_file,
            time.time() - t0,
        )
    except FileNotFoundError as e:
        logger.error("File error: %s", e)
        return 1
    except ClangDocError as e:
        logger.error("Extraction failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
