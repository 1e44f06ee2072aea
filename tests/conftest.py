"""Shared fixtures for molstat tests"""

import pandas as pd
import pytest

HEADER = ["Rname", "Start", "End", "Size", "BX", "MI", "Reads",
          "Mapq_median", "AS_median", "NM_median"]


def molecule(**fields):
    """A molecule row that passes every filter unless overridden"""
    row = {
        "Rname": "chr1", "Start": 1000, "End": 11000, "Size": 10000,
        "BX": "A01C01B01D01", "MI": 1, "Reads": 10,
        "Mapq_median": 60, "AS_median": 140, "NM_median": 1,
    }
    row.update(fields)
    return row


def molecule_frame(rows):
    """Validated molecule frame from row dicts"""
    from molstat.core.molecules import validate_molecules
    return validate_molecules(pd.DataFrame(rows, columns=HEADER))


@pytest.fixture
def write_table(tmp_path):
    """Write rows (lists of cell strings) as a TSV and return its path"""
    def _write(rows, header=HEADER, name="molecules.tsv"):
        path = tmp_path / name
        lines = ["\t".join(header)]
        lines += ["\t".join(str(c) for c in row) for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
