from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from .nodes import TableNode

ROW_GROUP_TAGS = ("thead", "tbody", "tfoot")
CELL_TAGS = ("td", "th")


@dataclass(frozen=True)
class SourceRow:
    """Fila <tr> tal como aparece en el HTML, con su grupo contenedor."""
    node: TableNode
    group: Optional[str]
    cells: List[TableNode]

    @property
    def all_header_cells(self) -> bool:
        return bool(self.cells) and all(c.name == "th" for c in self.cells)


def iter_table_rows(table: TableNode) -> Iterator[SourceRow]:
    """Enumera los <tr> de una tabla en orden de documento.

    Los grupos thead/tbody/tfoot se aplanan; nunca se desciende a tablas
    anidadas dentro de las celdas.
    """
    for child in table.children():
        name = child.name
        if name == "tr":
            yield SourceRow(node=child, group=None, cells=row_cells(child))
        elif name in ROW_GROUP_TAGS:
            for row in child.children():
                if row.name == "tr":
                    yield SourceRow(node=row, group=name, cells=row_cells(row))


def row_cells(row: TableNode) -> List[TableNode]:
    return [c for c in row.children() if c.name in CELL_TAGS]


def detect_header_rows(rows: Sequence[SourceRow]) -> List[bool]:
    """
    Marca las filas de cabecera.

    Si la tabla tiene <thead>, sólo sus filas son cabecera. Si no, una fila
    es cabecera cuando todas sus celdas son <th>.
    """
    if any(r.group == "thead" for r in rows):
        return [r.group == "thead" for r in rows]
    return [r.all_header_cells for r in rows]


def header_prefix_length(flags: Sequence[bool]) -> int:
    """Número de filas de cabecera contiguas al principio de la tabla."""
    n = 0
    for flag in flags:
        if not flag:
            break
        n += 1
    return n


def footer_suffix_length(rows: Sequence[SourceRow]) -> int:
    """Número de filas finales que pertenecen a un <tfoot>."""
    n = 0
    for r in reversed(rows):
        if r.group != "tfoot":
            break
        n += 1
    return n
