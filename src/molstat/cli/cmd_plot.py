"""molstat plot — mass-weighted molecule size histogram."""

import argparse
import sys

from molstat.cli.cmd_summarize import add_filter_args, filter_kwargs


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def add_parser_plot(subparsers):
    p = subparsers.add_parser(
        "plot",
        help="Plot the size distribution of filtered molecules, weighted by size.",
    )
    p.add_argument("--input", required=True, help="Molecule table (TSV).")
    p.add_argument(
        "--output", required=True, help="Figure path; format from extension."
    )
    p.add_argument(
        "--table", default=None, help="Also write the binned histogram (TSV)."
    )
    p.add_argument(
        "--bin-width", type=positive_int, default=1000, help="Bin width in bp (default: 1000)."
    )
    add_filter_args(p)
    p.set_defaults(func=plot_cmd)


def plot_cmd(args):
    from molstat.core.distribution import plot_size_distribution
    from molstat.core.molecules import filter_molecules, read_molecules

    retained = filter_molecules(read_molecules(args.input), **filter_kwargs(args))
    dist = plot_size_distribution(retained, args.output, bin_width=args.bin_width)
    print(f"Wrote size distribution to {args.output}", file=sys.stderr)
    if args.table is not None:
        dist.to_csv(args.table, sep="\t", index=False)
        print(f"Wrote {len(dist)} bins to {args.table}", file=sys.stderr)
