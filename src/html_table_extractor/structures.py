from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Cell:
    """Celda lógica con su esquina superior izquierda en la rejilla."""
    text: str
    origin_row: int
    origin_col: int
    row_span: int = 1
    column_span: int = 1
    is_header: bool = False
    is_padding: bool = False

    def positions(self) -> Iterator[Tuple[int, int]]:
        """Recorre todas las coordenadas (fila, columna) que cubre la celda."""
        for r in range(self.origin_row, self.origin_row + self.row_span):
            for c in range(self.origin_col, self.origin_col + self.column_span):
                yield r, c


@dataclass(frozen=True)
class Row:
    cells: Tuple[Cell, ...]
    column_count: int
    is_header: bool = False

    @property
    def texts(self) -> List[str]:
        return [cell.text for cell in self.cells]


@dataclass(frozen=True)
class Table:
    """Tabla rectangular reconstruida a partir de un elemento <table>."""
    rows: Tuple[Row, ...]
    column_count: int
    header_row_count: int = 0
    footer_row_count: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def header_rows(self) -> Tuple[Row, ...]:
        return self.rows[:self.header_row_count]

    @property
    def body_rows(self) -> Tuple[Row, ...]:
        return self.rows[self.header_row_count:]

    def cells(self) -> Iterator[Cell]:
        for row in self.rows:
            yield from row.cells

    def grid(self) -> List[List[Optional[Cell]]]:
        """Rejilla lógica: cada posición apunta a la celda que la cubre."""
        matrix: List[List[Optional[Cell]]] = [
            [None] * self.column_count for _ in self.rows
        ]
        for cell in self.cells():
            for r, c in cell.positions():
                matrix[r][c] = cell
        return matrix

    def to_matrix(self, fill_spans: bool = False) -> List[List[str]]:
        """
        Devuelve el texto de la rejilla fila a fila.

        Las posiciones cubiertas por un span (que no son el origen) quedan
        vacías, o repiten el texto de la celda si `fill_spans` es True.
        """
        out: List[List[str]] = []
        for r, line in enumerate(self.grid()):
            values = []
            for c, cell in enumerate(line):
                if cell is None:
                    values.append("")
                elif fill_spans or (cell.origin_row == r and cell.origin_col == c):
                    values.append(cell.text)
                else:
                    values.append("")
            out.append(values)
        return out


@dataclass
class TableMetadata:
    position: int
    row_count: int
    column_count: int
    header_row_count: int
    footer_row_count: int
    id: Optional[str] = None
    class_name: Optional[str] = None
    caption: Optional[str] = None
    parent_section: Optional[str] = None
    preceding_heading: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["class"] = data.pop("class_name")
        return data


@dataclass
class PageMetadata:
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[str] = None
    last_modified: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExtractedTable:
    table: Table
    metadata: TableMetadata


@dataclass
class ExtractionResult:
    page: PageMetadata
    tables: List[ExtractedTable] = field(default_factory=list)
    extraction_time_ms: int = 0
