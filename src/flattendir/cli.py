"""Command line interface for flattendir."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from flattendir import __version__
from flattendir.config import DEFAULT_MARKDOWN_TARGET, FLATTENDIR_LOG_LEVEL
from flattendir.exceptions import FlattendirError
from flattendir.flatten import FlattenOptions, flatten_directory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flattendir",
        description=(
            "Flatten a directory tree into one Markdown document (default) "
            "or into a single flat directory of renamed files."
        ),
    )
    parser.add_argument("source", type=Path, help="The directory to flatten")
    parser.add_argument(
        "target",
        type=Path,
        nargs="?",
        help=(
            f"Where to write the output (default: ./{DEFAULT_MARKDOWN_TARGET}, "
            "or the current directory with --directory)"
        ),
    )
    parser.add_argument(
        "-m",
        "--move",
        action="store_true",
        help="Move files instead of copying (original files will be deleted)",
    )
    parser.add_argument(
        "-o",
        "--overwrite",
        action="store_true",
        help="Overwrite existing files in target if conflicts occur",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional gitignore-style pattern to skip (repeatable)",
    )
    parser.add_argument(
        "--no-gitignore",
        dest="gitignore",
        action="store_false",
        help="Do not respect .gitignore files",
    )
    parser.add_argument(
        "-d",
        "--directory",
        action="store_true",
        help="Flatten into a directory of renamed files instead of a Markdown document",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without changing anything",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the directories searched",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = args.verbose or args.dry_run
    logging.basicConfig(
        level=logging.INFO if verbose else FLATTENDIR_LOG_LEVEL,
        format="%(message)s",
    )

    target = args.target
    if target is None:
        target = Path.cwd() if args.directory else Path.cwd() / DEFAULT_MARKDOWN_TARGET

    options = FlattenOptions(
        move=args.move,
        overwrite=args.overwrite,
        ignore_patterns=args.ignore,
        respect_gitignore=args.gitignore,
        flatten_to_directory=args.directory,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )

    try:
        result = asyncio.run(flatten_directory(args.source, target, options))
    except FlattendirError as exc:
        logger.error("%s", exc)
        return 1

    print(result.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
