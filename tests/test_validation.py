"""Pruebas de la comprobación de ocupación con numpy sobre las tablas reconstruidas."""

# pylint: disable=missing-function-docstring

from html_table_extractor.structures import Cell, Row, Table
from html_table_extractor.validation import check_layout, occupancy_matrix


def make_table(cells, rows, cols):
    by_row = [[] for _ in range(rows)]
    for cell in cells:
        by_row[cell.origin_row].append(cell)
    return Table(rows=tuple(Row(cells=tuple(c), column_count=cols) for c in by_row), column_count=cols)


def test_extracted_table_passes(tables_from):
    [table] = tables_from(
        "<table><tr><td rowspan=2>a</td><td colspan=2>b</td></tr><tr><td>c</td></tr></table>"
    )
    report = check_layout(table)
    assert report.ok
    occupancy, outside = occupancy_matrix(table)
    assert occupancy.shape == (2, 3)
    assert occupancy.min() == 1 and occupancy.max() == 1
    assert outside == 0


def test_detects_gap_and_overlap():
    table = make_table([
        Cell(text="a", origin_row=0, origin_col=0, column_span=2),
        Cell(text="b", origin_row=0, origin_col=1),
    ], rows=2, cols=2)
    report = check_layout(table)
    assert report.overlaps == [(0, 1)]
    assert report.gaps == [(1, 0), (1, 1)]
    assert not report.ok


def test_detects_out_of_bounds():
    table = make_table([Cell(text="a", origin_row=0, origin_col=0, row_span=2)], rows=1, cols=1)
    report = check_layout(table)
    assert report.out_of_bounds == 1
    assert report.to_dict()["out_of_bounds"] == 1
