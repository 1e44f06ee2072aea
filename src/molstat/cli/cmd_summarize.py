"""molstat summarize — GEM and molecule N50 summary from a molecule table."""

from molstat.core.molecules import EXCLUDED_CONTIG, MAX_NM, MIN_AS, MIN_READS, MIN_SIZE


def add_filter_args(p):
    """Register the molecule filter thresholds on a subparser."""
    p.add_argument(
        "--min-reads", type=int, default=MIN_READS,
        help=f"Minimum reads per molecule (default: {MIN_READS}).",
    )
    p.add_argument(
        "--min-as", type=int, default=MIN_AS,
        help=f"Minimum median alignment score (default: {MIN_AS}).",
    )
    p.add_argument(
        "--max-nm", type=int, default=MAX_NM,
        help=f"Median edit distance must be below this (default: {MAX_NM}).",
    )
    p.add_argument(
        "--min-size", type=int, default=MIN_SIZE,
        help=f"Minimum molecule size in bp (default: {MIN_SIZE}).",
    )
    p.add_argument(
        "--exclude-contig", default=EXCLUDED_CONTIG,
        help=f"Contig to drop, e.g. the plastid genome (default: {EXCLUDED_CONTIG}).",
    )


def filter_kwargs(args):
    return dict(
        min_reads=args.min_reads,
        min_as=args.min_as,
        max_nm=args.max_nm,
        min_size=args.min_size,
        exclude_contig=args.exclude_contig,
    )


def add_parser_summarize(subparsers):
    p = subparsers.add_parser(
        "summarize",
        help="Compute GEM/molecule N50 summary from a molecule table.",
    )
    p.add_argument("--input", required=True, help="Molecule table (TSV).")
    p.add_argument(
        "--output",
        default=None,
        help="Output summary file (default: input with .summary.txt suffix).",
    )
    p.add_argument(
        "--barcodes", default=None, help="Also write per-barcode aggregates (TSV)."
    )
    p.add_argument(
        "--plot", default=None, help="Also write the size distribution figure."
    )
    add_filter_args(p)
    p.set_defaults(func=summarize_cmd)


def summarize_cmd(args):
    from molstat.core.summarize import summarize_molecules

    summarize_molecules(
        args.input,
        args.output,
        barcodes_path=args.barcodes,
        plot_path=args.plot,
        **filter_kwargs(args),
    )
