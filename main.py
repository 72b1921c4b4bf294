#!/usr/bin/env python3
"""
Noospace - command-line client.

Every command loads the feed from the entry store first, then acts on it:
  - list / spiral: render the (optionally tag-filtered) feed
  - tags: list distinct tags
  - post: inscribe a new entry, subject to the daily ritual limit
  - star / delete: act on one entry by id

Usage:
    python main.py list                       # Scroll view of all entries
    python main.py list --tag dreams          # Only entries tagged "dreams"
    python main.py spiral                     # Spiral coordinates
    python main.py post "hello" -t "a, b"     # Inscribe
    python main.py star 42                    # Star entry 42
    python main.py --show-config              # Print configuration
"""

import argparse
import logging
import sys

from noospace import __version__
from noospace.config import (
    STORE_BACKEND,
    configure_logging,
    print_config_summary,
    validate_config,
)
from noospace.controller import FeedController, build_store
from noospace.policy import DAILY_LIMIT
from noospace.repository import EntryRepository
from noospace.views import VIEW_SCROLL, VIEW_SPIRAL


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="noospace",
        description="Inscribe, browse, star and delete Noospace entries.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                          Scroll view of the whole feed
  %(prog)s list --tag dreams             Filter by tag
  %(prog)s spiral                        Spiral layout with coordinates
  %(prog)s tags                          Distinct tags, sorted
  %(prog)s post "a brief impulse"        Inscribe with default symbol and tag
  %(prog)s post "hi" -s "☾" -t "a, b"     Inscribe with symbol and tags
  %(prog)s star 42                       Add a star to entry 42
  %(prog)s delete 42                     Delete entry 42
        """,
    )

    parser.add_argument(
        "--backend",
        choices=["supabase", "memory"],
        default=None,
        help=f"Entry store to use (default: {STORE_BACKEND})",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = subparsers.add_parser("list", help="Show the feed as a scroll")
    list_parser.add_argument("--tag", default="", help="Only entries with this tag")

    spiral_parser = subparsers.add_parser("spiral", help="Show the feed as a spiral")
    spiral_parser.add_argument("--tag", default="", help="Only entries with this tag")

    subparsers.add_parser("tags", help="List distinct tags")

    post_parser = subparsers.add_parser("post", help="Inscribe a new entry")
    post_parser.add_argument("text", help="Entry text (at most 240 characters)")
    post_parser.add_argument("--symbol", "-s", default="", help="One or two characters (default: ✶)")
    post_parser.add_argument("--tags", "-t", default="", help="Comma-separated tags (at most 5)")
    post_parser.add_argument(
        "--wallet",
        action="store_true",
        help="Attach a random display-only wallet token",
    )

    star_parser = subparsers.add_parser("star", help="Add a star to an entry")
    star_parser.add_argument("id", help="Entry id")

    delete_parser = subparsers.add_parser("delete", help="Delete an entry")
    delete_parser.add_argument("id", help="Entry id")

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Noospace Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def build_controller(backend: str = None) -> FeedController:
    """Create a controller over the chosen store backend."""
    return FeedController(EntryRepository(build_store(backend)))


def run_command(controller: FeedController, args: argparse.Namespace) -> int:
    """
    Run one subcommand against a loaded controller.

    Returns:
        Exit code (0 = success, 1 = error).
    """
    if args.command in ("list", "spiral"):
        controller.set_filter(args.tag)
        view = VIEW_SPIRAL if args.command == "spiral" else VIEW_SCROLL
        print(controller.layout(view).to_text())
        return 0

    if args.command == "tags":
        for tag in controller.all_tags():
            print(tag)
        return 0

    if args.command == "post":
        if args.wallet:
            controller.connect_wallet()
        result = controller.inscribe(args.text, symbol=args.symbol, tags=args.tags)
        if not result.success:
            print(f"✗ {result.error}", file=sys.stderr)
            return 1
        print(f"✓ Inscribed {result.entry.symbol} {result.entry.text} (id={result.entry.id})")
        print(f"  Daily rituals left: {controller.rituals_left()} / {DAILY_LIMIT}")
        return 0

    if args.command == "star":
        result = controller.star(args.id)
        if not result.success:
            print(f"✗ {result.error}", file=sys.stderr)
            return 1
        print(f"⭐ {result.entry.stars}  {result.entry.text}")
        return 0

    if args.command == "delete":
        result = controller.delete(args.id)
        if not result.success:
            print(f"✗ {result.error}", file=sys.stderr)
            return 1
        print(f"✓ Deleted entry {args.id}")
        return 0

    return 1


def main(argv: list = None, controller: FeedController = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).
        controller: Pre-built controller (default: one over the configured store).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    if controller is None:
        controller = build_controller(args.backend)

    try:
        loaded = controller.load()
        if not loaded.success:
            print(f"✗ {loaded.error}", file=sys.stderr)
            return 1

        return run_command(controller, args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
