"""
Command-line front end for schemat.

Formats S-expression files in place, checks that they are formatted, or
formats standard input to standard output.

Usage:
    schemat < main.scm                  # Format stdin to stdout
    schemat 'src/**/*.scm'              # Format files in place
    schemat --check 'src/**/*.scm'      # Report unformatted files
    schemat -i 'vendor/*' '**/*.scm'    # Skip paths matching a pattern

Exit Codes:
    0 - Every input formatted (or already formatted with --check)
    1 - Some input failed to parse, could not be read, or is unformatted
"""

from __future__ import annotations

import argparse
import fnmatch
import glob
import logging
import sys
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from schemat import __version__, format, format_with_status
from schemat.config import DEFAULT_MAX_WIDTH
from schemat.errors import SchematError
from schemat.utils.logger import get_logger

logger = get_logger(__name__)

# Per-file failures that are reported and do not stop the run
_FILE_ERRORS = (SchematError, OSError, UnicodeDecodeError)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the schemat command."""
    parser = argparse.ArgumentParser(
        prog="schemat",
        description="Format Scheme, Lisp and other S-expression source",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Glob patterns of files to format or check (default: stdin)",
    )
    parser.add_argument(
        "--check",
        "-c",
        action="store_true",
        help="Check that files are formatted instead of rewriting them",
    )
    parser.add_argument(
        "--ignore",
        "-i",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip paths matching this pattern (repeatable)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Report every file, not only failures",
    )
    parser.add_argument(
        "--width",
        "-w",
        type=int,
        default=DEFAULT_MAX_WIDTH,
        help=f"Maximum line width (default: {DEFAULT_MAX_WIDTH})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.width < 1:
        parser.error(f"--width must be positive, got {args.width}")

    if not args.paths:
        if args.check:
            print("cannot check stdin", file=sys.stderr)
            return 1
        return format_stdin(args.width)

    paths = list(expand_paths(args.paths, args.ignore))
    logger.debug("resolved %d file(s) from %d pattern(s)", len(paths), len(args.paths))

    if args.check:
        return check_paths(paths, width=args.width, verbose=args.verbose)
    return format_paths(paths, width=args.width, verbose=args.verbose)


def format_stdin(width: int) -> int:
    """Format standard input to standard output."""
    source = sys.stdin.read()
    try:
        formatted = format(source, source_file="<stdin>", max_width=width)
    except SchematError as e:
        print(e, file=sys.stderr)
        return 1
    sys.stdout.write(formatted)
    sys.stdout.flush()
    return 0


def check_paths(paths: Sequence[Path], *, width: int, verbose: bool) -> int:
    """Check every file; report unformatted and unreadable ones."""
    failed = 0
    for path, result in _run_all(_check_file, paths, width):
        if isinstance(result, BaseException):
            print(f"ERROR\t{path}\t{result}", file=sys.stderr)
            failed += 1
        elif not result:
            print(f"FAIL\t{path}", file=sys.stderr)
            failed += 1
        elif verbose:
            print(f"OK\t{path}", file=sys.stderr)

    if failed:
        print(f"{failed} / {len(paths)} file(s) failed", file=sys.stderr)
        return 1
    return 0


def format_paths(paths: Sequence[Path], *, width: int, verbose: bool) -> int:
    """Format every file in place; report the ones that failed."""
    failed = 0
    for path, result in _run_all(_format_file, paths, width):
        if isinstance(result, BaseException):
            print(f"ERROR\t{path}\t{result}", file=sys.stderr)
            failed += 1
        elif verbose:
            print(f"FORMAT\t{path}", file=sys.stderr)

    if failed:
        print(f"{failed} / {len(paths)} file(s) failed to format", file=sys.stderr)
        return 1
    return 0


def expand_paths(patterns: Iterable[str], ignored: Sequence[str]) -> Iterable[Path]:
    """Expand glob patterns into files, dropping ignored paths and duplicates.

    ``**`` matches any number of directories. A path is ignored when its
    full path or file name, or the path or name of a parent directory,
    matches an ignore pattern.
    """
    seen: set[Path] = set()
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)):
            path = Path(match)
            if path in seen or not path.is_file():
                continue
            seen.add(path)
            if is_ignored(path, ignored):
                logger.debug("ignoring %s", path)
                continue
            yield path


def is_ignored(path: Path, ignored: Sequence[str]) -> bool:
    candidates = [path.name, path.as_posix()]
    for parent in path.parents:
        if parent != Path("."):
            candidates.extend((parent.name, parent.as_posix()))
    return any(fnmatch.fnmatch(c, pattern) for pattern in ignored for c in candidates)


def _check_file(path: Path, width: int) -> bool:
    source = path.read_text(encoding="utf-8")
    _, changed = format_with_status(source, source_file=str(path), max_width=width)
    return not changed


def _format_file(path: Path, width: int) -> bool:
    source = path.read_text(encoding="utf-8")
    formatted, changed = format_with_status(source, source_file=str(path), max_width=width)
    if changed:
        path.write_text(formatted, encoding="utf-8")
        logger.debug("rewrote %s", path)
    return changed


def _run_all(fn, paths: Sequence[Path], width: int) -> list[tuple[Path, object]]:
    """Run fn over paths concurrently, pairing each path with its result or error."""

    def run_one(path: Path) -> tuple[Path, object]:
        try:
            return path, fn(path, width)
        except _FILE_ERRORS as e:
            return path, e

    with ThreadPoolExecutor() as executor:
        return list(executor.map(run_one, paths))


if __name__ == "__main__":
    sys.exit(main())
