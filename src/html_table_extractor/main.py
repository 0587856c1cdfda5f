from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional

from .config import (
    DEFAULT_PARSER,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    OUTPUT_FORMATS,
    ExtractionOptions,
)
from .exporters import tables_to_json, write_csv, write_csv_files
from .fetch import fetch_html, read_html_file
from .grid_builder import GridBuilder
from .metadata import describe_table, extract_page_metadata
from .parser import parse_html_document
from .structures import ExtractedTable, ExtractionResult
from .validation import check_layout

log = logging.getLogger(__name__)


def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def extract_from_html(
    html: str,
    url: str,
    *,
    options: Optional[ExtractionOptions] = None,
    parser: str = DEFAULT_PARSER,
    started: Optional[float] = None,
) -> ExtractionResult:
    """
    Extrae todas las tablas de un documento HTML ya descargado.
    `started` permite incluir el tiempo de descarga en extraction_time_ms.
    """
    started = time.perf_counter() if started is None else started
    soup, root = parse_html_document(html, parser)
    page = extract_page_metadata(soup, url)

    builder = GridBuilder(options)
    tables = []
    for position, node in enumerate(builder.iter_table_roots(root), start=1):
        table = builder.build_table(node)
        if table is None:
            log.debug("La tabla en la posición %d está vacía; se omite.", position)
            continue
        report = check_layout(table)
        if not report.ok:
            log.warning("La tabla en la posición %d no es rectangular: %s", position, report.to_dict())
        tables.append(ExtractedTable(table=table, metadata=describe_table(node.raw, table, position)))

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    if not tables:
        log.warning("No se encontraron tablas en %s.", url)
    else:
        log.info("Se extrajeron %d tablas de %s.", len(tables), url)
    return ExtractionResult(page=page, tables=tables, extraction_time_ms=elapsed_ms)


def extract_from_url(
    url: str,
    *,
    options: Optional[ExtractionOptions] = None,
    parser: str = DEFAULT_PARSER,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> ExtractionResult:
    started = time.perf_counter()
    html = fetch_html(url, user_agent=user_agent, timeout=timeout)
    return extract_from_html(html, url, options=options, parser=parser, started=started)


def run_extraction(
    url: Optional[str],
    *,
    html_file: Optional[str] = None,
    output: Optional[str] = None,
    fmt: str = "json",
    json_form: str = "object",
    split: bool = False,
    fill_spans: bool = False,
    options: Optional[ExtractionOptions] = None,
    parser: str = DEFAULT_PARSER,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> ExtractionResult:
    """
    Orquesta descarga, extracción y escritura en el formato elegido.
    Sin `output` el resultado va a stdout.
    """
    fmt = (fmt or "json").lower()
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Formato de salida no soportado: {fmt!r}")
    if split and (fmt != "csv" or not output):
        raise ValueError("--split requiere --format csv y un directorio en --output.")
    if not url and not html_file:
        raise ValueError("Se requiere una URL o un archivo HTML.")

    if html_file:
        started = time.perf_counter()
        html = read_html_file(html_file)
        result = extract_from_html(html, url or Path(html_file).resolve().as_uri(),
                                   options=options, parser=parser, started=started)
    else:
        result = extract_from_url(url, options=options, parser=parser,
                                  user_agent=user_agent, timeout=timeout)

    if fmt == "json":
        text = tables_to_json(result, form=json_form, fill_spans=fill_spans)
        if output:
            _ensure_parent_dir(output)
            Path(output).write_text(text + "\n", encoding="utf-8")
            log.info("Resultados escritos en %s", output)
        else:
            sys.stdout.write(text + "\n")
    elif split:
        paths = write_csv_files(result, output, fill_spans=fill_spans)
        log.info("%d archivos CSV escritos en %s", len(paths), output)
    elif output:
        _ensure_parent_dir(output)
        with open(output, "w", encoding="utf-8", newline="") as fh:
            write_csv(result, fh, fill_spans=fill_spans)
        log.info("Resultados escritos en %s", output)
    else:
        write_csv(result, sys.stdout, fill_spans=fill_spans)

    log.info("Resumen: URL=%s, tablas=%d, tiempo=%d ms",
             result.page.url, len(result.tables), result.extraction_time_ms)
    return result
