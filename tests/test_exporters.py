"""Pruebas de la exportación a JSON, CSV y DataFrame."""

# pylint: disable=missing-function-docstring

import csv
import io
import json

import pandas as pd
import pytest

from html_table_extractor.exporters import (
    CSV_SEPARATOR,
    table_to_dataframe,
    tables_to_json,
    write_csv,
    write_csv_files,
)
from html_table_extractor.main import extract_from_html
from html_table_extractor.structures import Table

HTML = """
<title>Demo</title>
<h2>Prices</h2>
<table>
  <caption>Fruit</caption>
  <tr><th>Name</th><th>Note</th></tr>
  <tr><td rowspan="2">Apple</td><td>red, "crisp"</td></tr>
  <tr><td>green</td></tr>
</table>
<table><tr><td>solo</td></tr></table>
"""


@pytest.fixture
def result():
    return extract_from_html(HTML, "https://example.com")


def test_json_object_form(result):
    data = json.loads(tables_to_json(result))
    assert data["page"]["title"] == "Demo"
    assert len(data["tables"]) == 2
    first = data["tables"][0]
    assert first["headers"] == [["Name", "Note"]]
    assert first["rows"] == [["Apple", 'red, "crisp"'], ["", "green"]]
    assert first["metadata"]["caption"] == "Fruit"
    assert first["metadata"]["preceding_heading"] == "Prices"
    assert "extraction_time_ms" in data


def test_json_array_form_with_filled_spans(result):
    data = json.loads(tables_to_json(result, form="array", fill_spans=True))
    assert data == [
        [["Name", "Note"], ["Apple", 'red, "crisp"'], ["Apple", "green"]],
        [["solo"]],
    ]


def test_json_rejects_unknown_form(result):
    with pytest.raises(ValueError):
        tables_to_json(result, form="yaml")


def test_csv_stream(result):
    buf = io.StringIO()
    write_csv(result, buf)
    text = buf.getvalue()
    assert text.startswith("# URL: https://example.com\n# Title: Demo\n# Tables found: 2\n")
    assert "# Table 1 of 2\n# Position: 1\n# Caption: Fruit\n# Preceding heading: Prices\n" in text
    assert CSV_SEPARATOR in text

    data_lines = [line for line in text.splitlines() if line and not line.startswith("#")]
    rows = list(csv.reader(data_lines))
    assert rows == [["Name", "Note"], ["Apple", 'red, "crisp"'], ["", "green"], ["solo"]]


def test_csv_files(result, tmp_path):
    paths = write_csv_files(result, str(tmp_path / "out"))
    assert [p.name for p in paths] == ["table_1.csv", "table_2.csv"]
    with open(paths[0], encoding="utf-8-sig", newline="") as fh:
        assert list(csv.reader(fh)) == [["Name", "Note"], ["Apple", 'red, "crisp"'], ["", "green"]]


def test_dataframe_single_header(result):
    df = table_to_dataframe(result.tables[0].table)
    assert list(df.columns) == ["Name", "Note"]
    assert df["Name"].tolist() == ["Apple", "Apple"]


def test_dataframe_multi_header(tables_from):
    [table] = tables_from(
        "<table><thead><tr><th colspan=2>Group</th></tr><tr><th>a</th><th>b</th></tr></thead>"
        "<tr><td>1</td><td>2</td></tr></table>"
    )
    df = table_to_dataframe(table)
    assert isinstance(df.columns, pd.MultiIndex)
    assert df.columns.tolist() == [("Group", "a"), ("Group", "b")]
    assert df.iloc[0].tolist() == ["1", "2"]


def test_dataframe_without_header(tables_from):
    [table] = tables_from("<table><tr><td>1</td><td>2</td></tr></table>")
    df = table_to_dataframe(table)
    assert df.shape == (1, 2)
    assert list(df.columns) == [0, 1]


def test_csv_builds_each_grid_once(result, tmp_path, monkeypatch):
    calls = []
    original = Table.grid

    def counting_grid(self):
        calls.append(self)
        return original(self)

    monkeypatch.setattr(Table, "grid", counting_grid)
    write_csv(result, io.StringIO())
    assert len(calls) == len(result.tables)

    calls.clear()
    write_csv_files(result, str(tmp_path / "files"))
    assert len(calls) == len(result.tables)
