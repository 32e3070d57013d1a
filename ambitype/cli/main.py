"""Main CLI entry point for ambitype."""

import argparse
import sys

from ambitype import __version__
from ambitype.cli.commands import books, sample, stats
from ambitype.services.corpus_stream import DEFAULT_INITIAL_BUFFER_CHARS
from ambitype.services.typing_stats import ROLLING_WINDOW_MS


def _add_corpus_source_options(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--base-url",
        help="Server root that serves /corpus/index.json",
    )
    source.add_argument(
        "--corpus-dir",
        help="Local directory containing corpus/index.json and corpus/books/",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ambitype",
        description="Endless typing practice text from a corpus of books",
        epilog="Use 'ambitype <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ambitype books
    books_parser = subparsers.add_parser(
        "books",
        help="List books in the corpus index",
        description="Load the corpus index and list every valid book entry",
    )
    _add_corpus_source_options(books_parser)

    # ambitype sample
    sample_parser = subparsers.add_parser(
        "sample",
        help="Print the opening text of a practice session",
        description="Pick a random book and print the initial typing buffer",
    )
    _add_corpus_source_options(sample_parser)
    sample_parser.add_argument(
        "--chars",
        type=int,
        default=DEFAULT_INITIAL_BUFFER_CHARS,
        help="Minimum number of characters to print",
    )
    sample_parser.add_argument("--seed", type=int, help="Random seed for a repeatable sample")
    sample_parser.add_argument("--book", help="Book id to sample instead of a random one")

    # ambitype stats <events.json>
    stats_parser = subparsers.add_parser(
        "stats",
        help="Compute WPM and accuracy from a keystroke log",
        description="Read a JSON list of {t, chars, correctChars} events and report statistics",
    )
    stats_parser.add_argument("events", help="Path to the JSON event log")
    stats_parser.add_argument(
        "--window-ms",
        type=int,
        default=ROLLING_WINDOW_MS,
        help="Rolling window length in milliseconds",
    )

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Dispatch to appropriate command
    if args.command == "books":
        return books.books_command(args)
    elif args.command == "sample":
        return sample.sample_command(args)
    elif args.command == "stats":
        return stats.stats_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
