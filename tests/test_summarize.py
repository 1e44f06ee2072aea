"""Tests for barcode aggregation, summary blocks and the summarize pipeline"""

import csv

import pytest

from conftest import molecule, molecule_frame
from molstat.core.summarize import (
    aggregate_barcodes,
    barcode_summary,
    molecule_summary,
    summarize_molecules,
    summary_table,
    write_summary,
)
from molstat.exceptions import EmptyInputError

BARCODE_METRICS = [
    "GEMs Detected",
    "N50 Reads per GEM",
    "Median DNA per GEM",
    "Mean DNA per GEM",
    "N50 DNA per GEM",
]
MOLECULE_METRICS = [
    "Molecules Detected",
    "N50 Reads per Molecule",
    "Median Molecule Size",
    "Mean Molecule Size",
    "N50 Molecule Size",
]


def read_tsv(path):
    with open(path, newline="") as fh:
        return list(csv.reader(fh, delimiter="\t"))


def test_aggregate_single_barcode():
    """All molecules sharing a barcode collapse to counts and sums"""
    frame = molecule_frame(
        [
            molecule(BX="AA", MI=1, Reads=5, Size=1000),
            molecule(BX="AA", MI=2, Reads=7, Size=2500),
            molecule(BX="AA", MI=3, Reads=9, Size=600),
        ]
    )
    barcodes = aggregate_barcodes(frame)
    assert len(barcodes) == 1
    row = barcodes.iloc[0]
    assert row["BX"] == "AA"
    assert row["Molecules"] == 3
    assert row["Reads"] == 21
    assert row["Size"] == 4100


def test_aggregate_sorted_by_reads():
    frame = molecule_frame(
        [
            molecule(BX="low", Reads=4),
            molecule(BX="high", Reads=50),
            molecule(BX="mid", Reads=10),
            molecule(BX="mid", Reads=10),
        ]
    )
    barcodes = aggregate_barcodes(frame)
    assert barcodes["BX"].tolist() == ["high", "mid", "low"]
    assert barcodes["Molecules"].tolist() == [1, 2, 1]


def test_molecule_summary_values():
    frame = molecule_frame(
        [
            molecule(BX="A", Reads=10, Size=1000),
            molecule(BX="A", Reads=20, Size=2000),
            molecule(BX="B", Reads=30, Size=3000),
            molecule(BX="C", Reads=40, Size=4000),
        ]
    )
    summary = molecule_summary(frame)
    assert [name for name, _ in summary] == MOLECULE_METRICS
    assert dict(summary) == {
        "Molecules Detected": 4,
        "N50 Reads per Molecule": 30,
        "Median Molecule Size": 2500.0,
        "Mean Molecule Size": 2500.0,
        "N50 Molecule Size": 3000,
    }


def test_barcode_summary_values():
    frame = molecule_frame(
        [
            molecule(BX="A", Reads=10, Size=1000),
            molecule(BX="A", Reads=20, Size=2000),
            molecule(BX="B", Reads=30, Size=3000),
            molecule(BX="C", Reads=40, Size=4000),
        ]
    )
    summary = barcode_summary(aggregate_barcodes(frame))
    assert [name for name, _ in summary] == BARCODE_METRICS
    # A and B both total 30 reads / 3000 bp, C has 40 / 4000
    assert dict(summary) == pytest.approx({
        "GEMs Detected": 3,
        "N50 Reads per GEM": 30,
        "Median DNA per GEM": 3000.0,
        "Mean DNA per GEM": 10000 / 3,
        "N50 DNA per GEM": 3000,
    })


def test_summary_table_order():
    frame = molecule_frame([molecule(BX="A"), molecule(BX="B")])
    summary = summary_table(frame)
    assert [name for name, _ in summary] == BARCODE_METRICS + MOLECULE_METRICS


def test_empty_blocks_raise():
    frame = molecule_frame([molecule()]).iloc[0:0]
    with pytest.raises(EmptyInputError):
        molecule_summary(frame)
    with pytest.raises(EmptyInputError):
        barcode_summary(aggregate_barcodes(frame))
    with pytest.raises(EmptyInputError):
        summary_table(frame)


def test_write_summary(tmp_path):
    path = tmp_path / "summary.tsv"
    write_summary([("GEMs Detected", 2), ("Mean DNA per GEM", 1500.5)], path)
    assert path.read_text() == (
        "Metric\tValue\nGEMs Detected\t2\nMean DNA per GEM\t1500.5\n"
    )


def test_end_to_end(write_table, tmp_path):
    """Three rows, two barcodes, one dropped for size: ten metrics out"""
    path = write_table(
        [
            ["chr1", 0, 5000, 5000, "AA", 1, 20, 60, 150, 1],
            ["chr2", 100, 3100, 3000, "BB", 2, 12, 60, 140, 0],
            ["chr2", 100, 400, 300, "AA", 3, 9, 60, 140, 0],
        ]
    )
    out = tmp_path / "summary.tsv"
    summary = summarize_molecules(str(path), str(out))

    rows = read_tsv(out)
    assert rows[0] == ["Metric", "Value"]
    assert len(rows) == 11
    values = dict(rows[1:])
    assert values["GEMs Detected"] == "2"
    assert values["Molecules Detected"] == "2"
    assert values["N50 Reads per GEM"] == "20"
    assert values["Median Molecule Size"] == "4000.0"
    assert values["N50 Molecule Size"] == "5000"
    assert len(summary) == 10


def test_default_output_path(write_table):
    path = write_table([["chr1", 0, 5000, 5000, "AA", 1, 20, 60, 150, 1]])
    summarize_molecules(str(path))
    expected = path.with_name("molecules.summary.txt")
    assert expected.exists()
    assert len(read_tsv(expected)) == 11


def test_barcode_table_written(write_table, tmp_path):
    path = write_table(
        [
            ["chr1", 0, 5000, 5000, "AA", 1, 20, 60, 150, 1],
            ["chr1", 9000, 10000, 1000, "AA", 2, 6, 60, 150, 1],
        ]
    )
    barcodes = tmp_path / "barcodes.tsv"
    summarize_molecules(str(path), str(tmp_path / "s.tsv"), barcodes_path=str(barcodes))
    assert read_tsv(barcodes) == [
        ["BX", "Molecules", "Reads", "Size"],
        ["AA", "2", "26", "6000"],
    ]


def test_nothing_written_when_all_filtered(write_table, tmp_path):
    path = write_table([["KT634228", 0, 5000, 5000, "AA", 1, 20, 60, 150, 1]])
    out = tmp_path / "summary.tsv"
    with pytest.raises(EmptyInputError):
        summarize_molecules(str(path), str(out))
    assert not out.exists()


def test_no_summary_when_plot_fails(write_table, tmp_path):
    from molstat.exceptions import OutputFormatError

    path = write_table([["chr1", 0, 5000, 5000, "AA", 1, 20, 60, 150, 1]])
    out = tmp_path / "summary.tsv"
    barcodes = tmp_path / "barcodes.tsv"
    with pytest.raises(OutputFormatError):
        summarize_molecules(
            str(path), str(out), barcodes_path=str(barcodes),
            plot_path=str(tmp_path / "sizes.xyz"),
        )
    assert not out.exists()
    assert not barcodes.exists()
