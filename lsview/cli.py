"""Command-line front door for lsview.

Parses ``ls``-style flags, builds the color and account tables once, then
lists each target through the listing builder and renderer.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from .config import load_extra_colors, resolve_lscolors, save_lscolors
from .errors import ListingError, OutputWriteError
from .listing import Accounts, RawEntry, build_listing, collect_entries, load_accounts, sort_entries
from .listing.builder import join_base
from .listing.fs import is_directory_target
from .options import Options
from .render import ColorTable, build_color_table, format_long_fields, write_listing_name

EXIT_MINOR = 1
EXIT_SERIOUS = 2

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser; ``-h`` means human sizes, as in ``ls``."""
    parser = argparse.ArgumentParser(
        prog="lsview",
        description="List directory contents with BSD LSCOLORS colorization.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to list (default: .).")
    parser.add_argument("-a", "--all", action="store_true", help="Include entries starting with '.'.")
    parser.add_argument("-l", "--long", action="store_true", help="Use the long listing format.")
    parser.add_argument("-h", "--human", action="store_true", help="Print sizes like 1K, 234M, 2G.")
    parser.add_argument("-1", dest="one", action="store_true", help="List one entry per line.")
    parser.add_argument("-d", "--dirs-only", action="store_true", help="List directories only.")
    parser.add_argument("-r", "--reverse", dest="sort_reverse", action="store_true", help="Reverse the sort order.")
    parser.add_argument("-t", dest="sort_time", action="store_true", help="Sort by modification time, newest first.")
    parser.add_argument("-S", dest="sort_size", action="store_true", help="Sort by size, largest first.")
    parser.add_argument("--dirs-first", action="store_true", help="Group directories before files.")
    parser.add_argument("--color", action="store_true", help="Colorize names using LSCOLORS.")
    parser.add_argument("--lscolors", metavar="SPEC", default=None, help="Color spec overriding $LSCOLORS.")
    parser.add_argument(
        "--save-lscolors",
        action="store_true",
        help="Persist the resolved color spec as the configured default.",
    )
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr.")
    parser.add_argument("--help", action="store_true", help="Show this help message and exit.")
    return parser


def options_from_args(args: argparse.Namespace) -> Options:
    """Freeze parsed flags into an :class:`Options` value."""
    return Options(
        all=args.all,
        long=args.long,
        human=args.human,
        one=args.one,
        dirs_only=args.dirs_only,
        color=args.color,
        sort_reverse=args.sort_reverse,
        sort_time=args.sort_time,
        sort_size=args.sort_size,
        dirs_first=args.dirs_first,
        help=args.help,
    )


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )


def report_error(path: str, reason: str) -> None:
    """Print one ``lsview: path: reason`` diagnostic to stderr."""
    print(f"lsview: {path}: {reason}", file=sys.stderr)


def write_entries(
    out: TextIO,
    base_dir: str,
    entries: Sequence[RawEntry],
    table: ColorTable,
    options: Options,
    accounts: Accounts,
) -> int:
    """Build and print ``entries`` in order; return how many had to be skipped."""
    failures = 0
    records = []
    for entry in entries:
        try:
            records.append(build_listing(base_dir, entry, options, accounts))
        except ListingError as exc:
            report_error(join_base(base_dir, exc.path), exc.reason)
            failures += 1

    if options.long:
        for record in records:
            out.write(format_long_fields(record) + " ")
            write_listing_name(out, record, table, options)
            out.write("\n")
    elif options.one:
        for record in records:
            write_listing_name(out, record, table, options)
            out.write("\n")
    elif records:
        for index, record in enumerate(records):
            if index:
                out.write("  ")
            write_listing_name(out, record, table, options)
        out.write("\n")
    return failures


def run(
    targets: Sequence[str],
    options: Options,
    table: ColorTable,
    accounts: Accounts,
    out: TextIO,
) -> int:
    """List every target the way ``ls`` does and return the exit status.

    Non-directory targets print first as one group; each directory follows,
    headed by ``name:`` when more than one target was given.
    """
    status = 0
    files: list[RawEntry] = []
    directories: list[str] = []
    for target in targets:
        if not os.path.lexists(target):
            report_error(target, "No such file or directory")
            status = EXIT_SERIOUS
            continue
        if is_directory_target(target):
            directories.append(target)
            continue
        try:
            files.append(RawEntry(path=target, stat=os.lstat(target)))
        except OSError as exc:
            report_error(target, exc.strerror or str(exc))
            status = EXIT_SERIOUS

    if files and write_entries(out, "", sort_entries(files, options), table, options, accounts):
        status = max(status, EXIT_MINOR)

    show_headers = len(targets) > 1
    for index, directory in enumerate(directories):
        if show_headers:
            if files or index:
                out.write("\n")
            out.write(f"{directory}:\n")
        try:
            base_dir, entries = collect_entries(directory, options)
        except OSError as exc:
            report_error(directory, exc.strerror or str(exc))
            status = max(status, EXIT_MINOR)
            continue
        if write_entries(out, base_dir, entries, table, options, accounts):
            status = max(status, EXIT_MINOR)
    return status


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, build startup tables and print the listing.

    Exits with status 1 when some entries were skipped and 2 when a target
    does not exist.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help()
        return

    configure_logging(args.debug)
    options = options_from_args(args)

    spec = resolve_lscolors(args.lscolors, os.environ)
    if args.save_lscolors:
        save_lscolors(spec)
    table = build_color_table(spec, load_extra_colors())
    logger.debug("color spec %r, %d table entries", spec, len(table))
    accounts = load_accounts()

    try:
        status = run(args.paths or ["."], options, table, accounts, sys.stdout)
    except OutputWriteError as exc:
        raise SystemExit(f"lsview: {exc}") from exc
    except OSError as exc:
        raise SystemExit(f"lsview: write failed: {exc.strerror or exc}") from exc
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
