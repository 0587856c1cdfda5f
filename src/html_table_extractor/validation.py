from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from .structures import Table


@dataclass
class LayoutReport:
    gaps: List[Tuple[int, int]]
    overlaps: List[Tuple[int, int]]
    out_of_bounds: int
    ragged_rows: List[int]

    @property
    def ok(self) -> bool:
        return not (self.gaps or self.overlaps or self.out_of_bounds or self.ragged_rows)

    def to_dict(self) -> Dict[str, object]:
        return {
            "gaps": self.gaps,
            "overlaps": self.overlaps,
            "out_of_bounds": self.out_of_bounds,
            "ragged_rows": self.ragged_rows,
        }


def occupancy_matrix(table: Table) -> Tuple[np.ndarray, int]:
    """
    Cuenta cuántas celdas cubren cada posición (fila, columna) de la rejilla.

    Devuelve la matriz y el número de posiciones cubiertas fuera de los límites.
    """
    occupancy = np.zeros((table.row_count, table.column_count), dtype=int)
    outside = 0
    for cell in table.cells():
        r0, c0 = cell.origin_row, cell.origin_col
        r1, c1 = r0 + cell.row_span, c0 + cell.column_span
        outside += cell.row_span * cell.column_span
        rr0, rr1 = max(0, r0), min(table.row_count, r1)
        cc0, cc1 = max(0, c0), min(table.column_count, c1)
        if rr1 > rr0 and cc1 > cc0:
            occupancy[rr0:rr1, cc0:cc1] += 1
            outside -= (rr1 - rr0) * (cc1 - cc0)
    return occupancy, outside


def check_layout(table: Table) -> LayoutReport:
    """Comprueba que las celdas cubran la rejilla exactamente una vez."""
    occupancy, outside = occupancy_matrix(table)
    gaps = [(int(r), int(c)) for r, c in np.argwhere(occupancy == 0)]
    overlaps = [(int(r), int(c)) for r, c in np.argwhere(occupancy > 1)]
    ragged = [i for i, row in enumerate(table.rows) if row.column_count != table.column_count]
    return LayoutReport(gaps=gaps, overlaps=overlaps, out_of_bounds=outside, ragged_rows=ragged)
