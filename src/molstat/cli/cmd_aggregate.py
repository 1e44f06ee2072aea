"""molstat aggregate — per-barcode molecule, read and DNA totals."""

import sys

from molstat.cli.cmd_summarize import add_filter_args, filter_kwargs


def add_parser_aggregate(subparsers):
    p = subparsers.add_parser(
        "aggregate",
        help="Write per-barcode (GEM) aggregates of filtered molecules.",
    )
    p.add_argument("--input", required=True, help="Molecule table (TSV).")
    p.add_argument("--output", required=True, help="Output barcode table (TSV).")
    add_filter_args(p)
    p.set_defaults(func=aggregate_cmd)


def aggregate_cmd(args):
    from molstat.core.molecules import filter_molecules, read_molecules
    from molstat.core.summarize import aggregate_barcodes, write_barcodes

    retained = filter_molecules(read_molecules(args.input), **filter_kwargs(args))
    barcodes = aggregate_barcodes(retained)
    write_barcodes(barcodes, args.output)
    print(f"Wrote {len(barcodes)} barcodes to {args.output}", file=sys.stderr)
