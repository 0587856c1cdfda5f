# src/html_table_extractor/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Sequence, TextIO
import csv
import json

import pandas as pd

from .config import JSON_FORMS
from .structures import ExtractedTable, ExtractionResult, Table

CSV_SEPARATOR = "# ------------------------------"


def table_to_record(item: ExtractedTable, fill_spans: bool = False) -> Dict[str, Any]:
    """Forma objeto de una tabla: metadatos y filas de cabecera separadas del cuerpo."""
    matrix = item.table.to_matrix(fill_spans=fill_spans)
    h = item.table.header_row_count
    return {
        "metadata": item.metadata.to_dict(),
        "headers": matrix[:h],
        "rows": matrix[h:],
    }


def result_to_dict(result: ExtractionResult, fill_spans: bool = False) -> Dict[str, Any]:
    return {
        "page": result.page.to_dict(),
        "tables": [table_to_record(t, fill_spans) for t in result.tables],
        "extraction_time_ms": result.extraction_time_ms,
    }


def tables_to_json(result: ExtractionResult, form: str = "object",
                   fill_spans: bool = False, indent: int = 2) -> str:
    """
    Serializa el resultado a JSON.
      - "object": página, tablas con metadatos/cabeceras/filas y tiempo.
      - "array": lista de tablas, cada una lista de filas de texto.
    """
    if form not in JSON_FORMS:
        raise ValueError(f"Forma JSON desconocida: {form!r}")
    if form == "array":
        payload: Any = [t.table.to_matrix(fill_spans=fill_spans) for t in result.tables]
    else:
        payload = result_to_dict(result, fill_spans)
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def _write_comment(stream: TextIO, text: str) -> None:
    stream.write(f"# {text}\n")


def write_table_csv(stream: TextIO, table: Table, fill_spans: bool = False) -> None:
    """Escribe una tabla: primero las filas de cabecera y luego el cuerpo."""
    writer = csv.writer(stream, lineterminator="\n")
    matrix = table.to_matrix(fill_spans=fill_spans)
    h = table.header_row_count
    writer.writerows(matrix[:h])
    writer.writerows(matrix[h:])


def write_csv(result: ExtractionResult, stream: TextIO, fill_spans: bool = False) -> None:
    """Todas las tablas en un solo flujo CSV, separadas por comentarios '#'."""
    _write_comment(stream, f"URL: {result.page.url}")
    if result.page.title:
        _write_comment(stream, f"Title: {result.page.title}")
    _write_comment(stream, f"Tables found: {len(result.tables)}")
    _write_comment(stream, f"Extraction time: {result.extraction_time_ms} ms")
    stream.write("\n")

    total = len(result.tables)
    for i, item in enumerate(result.tables, start=1):
        meta = item.metadata
        _write_comment(stream, f"Table {i} of {total}")
        _write_comment(stream, f"Position: {meta.position}")
        if meta.caption:
            _write_comment(stream, f"Caption: {meta.caption}")
        if meta.preceding_heading:
            _write_comment(stream, f"Preceding heading: {meta.preceding_heading}")
        stream.write("\n")

        write_table_csv(stream, item.table, fill_spans)

        if i < total:
            stream.write("\n")
            stream.write(CSV_SEPARATOR + "\n")
            stream.write("\n")


def rows_to_csv(rows: Sequence[Sequence[str]], header: Sequence[Sequence[str]], csv_path: str) -> None:
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        w.writerows(header)
        w.writerows(rows)


def write_csv_files(result: ExtractionResult, directory: str, fill_spans: bool = False) -> List[Path]:
    """Un archivo table_<n>.csv por tabla dentro de `directory`."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for i, item in enumerate(result.tables, start=1):
        path = out_dir / f"table_{i}.csv"
        matrix = item.table.to_matrix(fill_spans=fill_spans)
        h = item.table.header_row_count
        rows_to_csv(matrix[h:], matrix[:h], str(path))
        written.append(path)
    return written


def table_to_dataframe(table: Table, fill_spans: bool = True) -> pd.DataFrame:
    """
    Convierte la tabla en un DataFrame de pandas.
    Una fila de cabecera da los nombres de columna; varias, un MultiIndex.
    """
    matrix = table.to_matrix(fill_spans=fill_spans)
    h = table.header_row_count
    body = matrix[h:]
    if h == 0:
        return pd.DataFrame(body, columns=range(table.column_count))
    if h == 1:
        columns: Any = matrix[0]
    else:
        columns = pd.MultiIndex.from_arrays(matrix[:h])
    return pd.DataFrame(body, columns=columns)
