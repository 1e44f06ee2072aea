"""molstat CLI entry point — dispatches subcommands."""

import argparse
import sys

from molstat import __version__
from molstat.exceptions import MolstatError


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="molstat",
        description="N50/L50 summary statistics for linked-read molecule tables.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")

    # Import and register each subcommand
    from molstat.cli.cmd_summarize import add_parser_summarize
    from molstat.cli.cmd_aggregate import add_parser_aggregate
    from molstat.cli.cmd_plot import add_parser_plot

    add_parser_summarize(subparsers)
    add_parser_aggregate(subparsers)
    add_parser_plot(subparsers)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except (MolstatError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
