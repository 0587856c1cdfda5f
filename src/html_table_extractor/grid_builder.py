# src/html_table_extractor/grid_builder.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .cleaners import cell_text
from .config import ExtractionOptions
from .nodes import TableNode
from .rows import (
    SourceRow,
    detect_header_rows,
    footer_suffix_length,
    header_prefix_length,
    iter_table_rows,
)
from .spans import (
    fit_column_span,
    fit_row_span,
    normalize_colspan,
    normalize_rowspan,
    required_width,
)
from .structures import Cell, Row, Table

log = logging.getLogger(__name__)


@dataclass
class _Placement:
    text: str
    row: int
    col: int
    row_span: int
    column_span: int
    is_header: bool


class _TableLayout:
    """
    Estado temporal de la construcción de UNA tabla.

    `pending` mapea columna → (filas restantes, celda) para los rowspan que
    siguen ocupando filas posteriores. Se descarta al terminar la tabla.
    """

    def __init__(self, row_count: int) -> None:
        self.row_count = row_count
        self.pending: Dict[int, Tuple[int, _Placement]] = {}
        self.placements: List[_Placement] = []
        self.width = 0

    def place_row(self, r: int, cells: Sequence[Tuple[TableNode, str]]) -> None:
        occupied: Set[int] = set(self.pending)
        col = 0
        for node, text in cells:
            while col in occupied:
                col += 1

            declared_cs = normalize_colspan(node.get("colspan"))
            cs = fit_column_span(col, declared_cs, occupied)
            if cs < declared_cs:
                log.debug("Fila %d: colspan %d recortado a %d por un rowspan previo.", r, declared_cs, cs)

            declared_rs = normalize_rowspan(node.get("rowspan"))
            rs = fit_row_span(r, declared_rs, self.row_count)
            if rs < declared_rs:
                log.debug("Fila %d: rowspan %d recortado a %d al final de la tabla.", r, declared_rs, rs)

            placement = _Placement(
                text=text, row=r, col=col, row_span=rs, column_span=cs,
                is_header=(node.name == "th"),
            )
            self.placements.append(placement)
            for c in range(col, col + cs):
                occupied.add(c)
                if rs > 1:
                    self.pending[c] = (rs, placement)

            width = required_width(self.width, col, cs)
            if r > 0 and width > self.width:
                log.debug("Fila %d desborda la tabla: %d → %d columnas.", r, self.width, width)
            self.width = width
            col += cs

        self._advance()

    def _advance(self) -> None:
        # Descontar una fila a cada span pendiente y eliminar los agotados
        self.pending = {
            c: (remaining - 1, p)
            for c, (remaining, p) in self.pending.items()
            if remaining > 1
        }

    def finalize(self, header_flags: Sequence[bool], footer_row_count: int) -> Table:
        covered = [[False] * self.width for _ in range(self.row_count)]
        by_row: List[List[Cell]] = [[] for _ in range(self.row_count)]

        for p in self.placements:
            for r in range(p.row, p.row + p.row_span):
                for c in range(p.col, p.col + p.column_span):
                    covered[r][c] = True
            by_row[p.row].append(Cell(
                text=p.text,
                origin_row=p.row,
                origin_col=p.col,
                row_span=p.row_span,
                column_span=p.column_span,
                is_header=p.is_header,
            ))

        padded = 0
        for r, line in enumerate(covered):
            for c, is_covered in enumerate(line):
                if not is_covered:
                    by_row[r].append(Cell(text="", origin_row=r, origin_col=c, is_padding=True))
                    padded += 1
        if padded:
            log.debug("Se añadieron %d celdas vacías para completar la rejilla.", padded)

        rows = tuple(
            Row(
                cells=tuple(sorted(cells, key=lambda cell: cell.origin_col)),
                column_count=self.width,
                is_header=bool(header_flags[r]),
            )
            for r, cells in enumerate(by_row)
        )
        return Table(
            rows=rows,
            column_count=self.width,
            header_row_count=header_prefix_length(header_flags),
            footer_row_count=footer_row_count,
        )


class GridBuilder:
    """Reconstruye la rejilla lógica de cada <table> de un árbol HTML."""

    def __init__(self, options: Optional[ExtractionOptions] = None) -> None:
        self.options = options or ExtractionOptions()

    def iter_table_roots(self, tree: TableNode) -> Iterator[TableNode]:
        """Recorre el árbol en profundidad y orden de documento buscando <table>."""
        stack: List[TableNode] = [tree]
        while stack:
            node = stack.pop()
            if node.name == "table":
                yield node
                if not self.options.include_nested:
                    continue
            children = [c for c in node.children() if c.name is not None]
            stack.extend(reversed(children))

    def build_table(self, node: TableNode) -> Optional[Table]:
        """Construye la tabla de un elemento <table>; None si no tiene filas ni columnas."""
        source_rows: List[SourceRow] = list(iter_table_rows(node))
        if not source_rows:
            log.debug("Tabla sin filas; se omite.")
            return None

        layout = _TableLayout(len(source_rows))
        for r, src in enumerate(source_rows):
            layout.place_row(r, [(c, cell_text(c, self.options.nested_text)) for c in src.cells])

        if layout.width == 0:
            log.debug("Tabla sin celdas (%d filas vacías); se omite.", len(source_rows))
            return None

        table = layout.finalize(detect_header_rows(source_rows), footer_suffix_length(source_rows))
        log.debug(
            "Tabla construida: %d filas x %d columnas (%d de cabecera).",
            table.row_count, table.column_count, table.header_row_count,
        )
        return table

    def extract_tables(self, tree: TableNode) -> List[Table]:
        tables: List[Table] = []
        for node in self.iter_table_roots(tree):
            table = self.build_table(node)
            if table is not None:
                tables.append(table)
        return tables
