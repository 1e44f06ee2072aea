"""Per-GEM and per-molecule summary statistics from a molecule table."""

import csv
import os
import sys

from molstat.core.molecules import (
    EXCLUDED_CONTIG,
    MAX_NM,
    MIN_AS,
    MIN_READS,
    MIN_SIZE,
    add_log_read_density,
    filter_molecules,
    read_molecules,
)
from molstat.core.nx import n50
from molstat.exceptions import EmptyInputError


def aggregate_barcodes(molecules):
    """Collapse molecules to one row per barcode (GEM).

    Returns a frame with columns BX, Molecules, Reads, Size, sorted by
    Reads descending.
    """
    barcodes = molecules.groupby("BX", sort=False).agg(
        Molecules=("Reads", "size"),
        Reads=("Reads", "sum"),
        Size=("Size", "sum"),
    )
    barcodes = barcodes.sort_values("Reads", ascending=False, kind="stable")
    return barcodes.reset_index()


def _size_block(frame, count_name, reads_name, median_name, mean_name, size_name):
    return [
        (count_name, len(frame)),
        (reads_name, n50(frame["Reads"])),
        (median_name, float(frame["Size"].median())),
        (mean_name, float(frame["Size"].mean())),
        (size_name, n50(frame["Size"])),
    ]


def barcode_summary(barcodes):
    """Five (metric, value) rows over per-barcode aggregates."""
    if barcodes.empty:
        raise EmptyInputError("no barcodes left to summarise")
    return _size_block(
        barcodes,
        "GEMs Detected",
        "N50 Reads per GEM",
        "Median DNA per GEM",
        "Mean DNA per GEM",
        "N50 DNA per GEM",
    )


def molecule_summary(molecules):
    """Five (metric, value) rows over individual molecules."""
    if molecules.empty:
        raise EmptyInputError("no molecules left to summarise")
    return _size_block(
        molecules,
        "Molecules Detected",
        "N50 Reads per Molecule",
        "Median Molecule Size",
        "Mean Molecule Size",
        "N50 Molecule Size",
    )


def summary_table(molecules, barcodes=None):
    """Barcode block followed by molecule block, ten rows in total."""
    if barcodes is None:
        barcodes = aggregate_barcodes(molecules)
    return barcode_summary(barcodes) + molecule_summary(molecules)


def write_summary(summary, output_path):
    """Write (metric, value) rows as a Metric/Value TSV."""
    with open(output_path, "w", newline="") as fh:
        writer = csv.writer(fh, delimiter="\t", lineterminator="\n")
        writer.writerow(["Metric", "Value"])
        for name, value in summary:
            writer.writerow([name, value])


def write_barcodes(barcodes, output_path):
    """Write the per-barcode aggregate table as TSV."""
    barcodes.to_csv(output_path, sep="\t", index=False)


def summarize_molecules(
    input_path,
    output_path=None,
    barcodes_path=None,
    plot_path=None,
    min_reads=MIN_READS,
    min_as=MIN_AS,
    max_nm=MAX_NM,
    min_size=MIN_SIZE,
    exclude_contig=EXCLUDED_CONTIG,
):
    """Read a molecule table, filter it and write the GEM/molecule summary.

    Parameters
    ----------
    input_path : str
        Tab-separated molecule table.
    output_path : str or None
        Summary TSV. If None, derives from input_path by replacing the
        extension with .summary.txt.
    barcodes_path : str or None
        Optional per-barcode aggregate table.
    plot_path : str or None
        Optional mass-weighted size histogram (format from extension).

    Returns the list of (metric, value) rows written.
    """
    if output_path is None:
        base, _ = os.path.splitext(input_path)
        output_path = base + ".summary.txt"

    print(f"Input:   {input_path}", file=sys.stderr)
    print(f"Output:  {output_path}", file=sys.stderr)

    molecules = read_molecules(input_path)
    retained = filter_molecules(
        molecules,
        min_reads=min_reads,
        min_as=min_as,
        max_nm=max_nm,
        min_size=min_size,
        exclude_contig=exclude_contig,
    )
    print(
        f"Molecules retained: {len(retained)} of {len(molecules)}",
        file=sys.stderr,
    )
    if not retained.empty:
        density = add_log_read_density(retained)["LogReadDensity"]
        print(
            f"Median log10(reads/bp): {density.median():.3f}",
            file=sys.stderr,
        )

    barcodes = aggregate_barcodes(retained)
    summary = summary_table(retained, barcodes)

    # Summary is written last: it exists only if every other output succeeded.
    if plot_path is not None:
        from molstat.core.distribution import plot_size_distribution

        plot_size_distribution(retained, plot_path)
        print(f"Wrote size distribution to {plot_path}", file=sys.stderr)

    if barcodes_path is not None:
        write_barcodes(barcodes, barcodes_path)
        print(f"Wrote {len(barcodes)} barcodes to {barcodes_path}", file=sys.stderr)

    write_summary(summary, output_path)
    print(f"Wrote {len(summary)} metrics to {output_path}", file=sys.stderr)

    return summary
