"""Read, validate and filter linked-read molecule tables."""

import csv

import numpy as np
import pandas as pd

from molstat.exceptions import SchemaError

MOLECULE_COLUMNS = (
    "Rname",
    "Start",
    "End",
    "Size",
    "BX",
    "MI",
    "Reads",
    "Mapq_median",
    "AS_median",
    "NM_median",
)
INTEGER_COLUMNS = (
    "Start",
    "End",
    "Size",
    "MI",
    "Reads",
    "Mapq_median",
    "AS_median",
    "NM_median",
)

# Plastid contig, excluded from nuclear-DNA statistics.
EXCLUDED_CONTIG = "KT634228"
MIN_READS = 4
MIN_AS = 100
MAX_NM = 5
MIN_SIZE = 500


def _as_int(values, column, source):
    if values.isna().any():
        row = int(values.isna().to_numpy().argmax())
        raise SchemaError(f"{source}: empty value in column {column} (row {row + 1})")
    converted = pd.to_numeric(values, errors="coerce")
    bad = converted.isna() | (converted % 1 != 0)
    if bad.any():
        value = values[bad].iloc[0]
        raise SchemaError(f"{source}: non-integer value {value!r} in column {column}")
    return converted.astype("int64")


def validate_molecules(frame, source="<table>"):
    """Check a molecule frame against the fixed column schema.

    Returns a normalised copy: integer columns as int64, ``Rname`` as
    strings and ``BX`` as strings with missing (or empty) barcodes as NaN.
    Raises SchemaError on any mismatch.
    """
    columns = list(frame.columns)
    missing = [c for c in MOLECULE_COLUMNS if c not in columns]
    extra = [c for c in columns if c not in MOLECULE_COLUMNS]
    if missing or extra or len(columns) != len(MOLECULE_COLUMNS):
        raise SchemaError(
            f"{source}: expected columns {', '.join(MOLECULE_COLUMNS)}; "
            f"missing {missing or 'none'}, unexpected {extra or 'none'}"
        )

    out = frame.loc[:, list(MOLECULE_COLUMNS)].copy()
    for column in INTEGER_COLUMNS:
        out[column] = _as_int(out[column], column, source)

    if out["Rname"].isna().any():
        raise SchemaError(f"{source}: empty value in column Rname")
    out["Rname"] = out["Rname"].astype(str)

    bx = out["BX"]
    present = bx.notna() & (bx.astype(str) != "")
    out["BX"] = bx.astype(str).where(present)
    return out.reset_index(drop=True)


def _check_field_counts(path):
    """Raise SchemaError on any data line whose field count differs from the header."""
    with open(path, newline="") as fh:
        reader = csv.reader(fh, delimiter="\t")
        header = next(reader, None)
        if header is None:
            return
        for lineno, fields in enumerate(reader, start=2):
            if fields and len(fields) != len(header):
                raise SchemaError(
                    f"{path}: line {lineno} has {len(fields)} fields, "
                    f"header has {len(header)}"
                )


def read_molecules(path):
    """Read a tab-separated molecule table with a header row.

    Parameters
    ----------
    path : str or Path
        Molecule table with columns Rname, Start, End, Size, BX, MI, Reads,
        Mapq_median, AS_median, NM_median.

    Raises SchemaError when the header or any value does not match the
    schema; I/O errors propagate unchanged.
    """
    _check_field_counts(path)
    try:
        frame = pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            index_col=False,
            keep_default_na=False,
            na_values=[""],
        )
    except pd.errors.EmptyDataError as exc:
        raise SchemaError(f"{path}: file is empty") from exc
    except pd.errors.ParserError as exc:
        raise SchemaError(f"{path}: {exc}") from exc
    return validate_molecules(frame, source=str(path))


def filter_molecules(
    frame,
    min_reads=MIN_READS,
    min_as=MIN_AS,
    max_nm=MAX_NM,
    min_size=MIN_SIZE,
    exclude_contig=EXCLUDED_CONTIG,
):
    """Keep molecules with a barcode that pass the read/alignment/size cuts.

    A row is retained iff BX is present, Rname is not ``exclude_contig``,
    Reads >= min_reads, AS_median >= min_as, NM_median < max_nm and
    Size >= min_size.
    """
    keep = (
        frame["BX"].notna()
        & (frame["Reads"] >= min_reads)
        & (frame["AS_median"] >= min_as)
        & (frame["NM_median"] < max_nm)
        & (frame["Size"] >= min_size)
    )
    if exclude_contig is not None:
        keep &= frame["Rname"] != exclude_contig
    return frame.loc[keep].reset_index(drop=True)


def add_log_read_density(frame):
    """Return a copy with LogReadDensity = log10(Reads / Size).

    NaN where Size is 0 or the ratio is not positive.
    """
    out = frame.copy()
    ratio = out["Reads"] / out["Size"].where(out["Size"] != 0)
    out["LogReadDensity"] = np.log10(ratio.where(ratio > 0))
    return out
