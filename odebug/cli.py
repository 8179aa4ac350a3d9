"""CLI inspector — show where debug logs go, then list, read, and search their entries."""

import argparse
import logging
import sys

from odebug.config import load_config
from odebug.errors import PathResolutionFailed
from odebug.inspector import (
    filter_by_header,
    list_log_files,
    read_entries,
    search_entries,
)
from odebug.resolver import PathResolver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="odebug",
        description="Inspect odebug diagnostic log files",
    )
    parser.add_argument("--config", help="YAML config file (default: $ODEBUG_CONFIG)")
    parser.add_argument("--dir", dest="log_dir",
                        help="Directory containing log files (default: resolved debug dir)")
    parser.add_argument("--header", metavar="TAG",
                        help="With --read, only show entries carrying this header")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--where", action="store_true", help="Print the resolved log directory")
    group.add_argument("--list", action="store_true", help="List log files with entry counts")
    group.add_argument("--read", metavar="FILENAME", help="Print the entries of one log file")
    group.add_argument("--search", metavar="TEXT",
                       help="Find entries whose message or headers contain TEXT")
    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [odebug] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)

    if args.log_dir:
        log_dir = args.log_dir
    else:
        # Only --where may create the directory; inspection stays read-only
        resolver = PathResolver(load_config(args.config))
        if args.where:
            try:
                log_dir = str(resolver.resolve())
            except PathResolutionFailed as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
        else:
            log_dir = str(resolver.base_dir())

    if args.where:
        print(log_dir)

    elif args.list:
        files = list_log_files(log_dir)
        if not files:
            print("No log files found.")
            return 0
        for name in files:
            count = len(read_entries(log_dir, name))
            print(f"  {name}  ({count} {'entry' if count == 1 else 'entries'})")

    elif args.read:
        try:
            entries = read_entries(log_dir, args.read)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if args.header:
            entries = filter_by_header(entries, args.header)
        for entry in entries:
            print(entry.render())
            print()

    elif args.search:
        results = search_entries(log_dir, args.search)
        if not results:
            print(f"No matches found for '{args.search}'.")
            return 0
        for filename, entry in results:
            print(f"  [{filename}] {entry.summary()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
