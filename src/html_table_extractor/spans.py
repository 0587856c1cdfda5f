"""
Reglas de normalización para tablas HTML mal formadas.

Cada regla es una función pura para poder probarla por separado:
  - normalize_span: span ausente, cero o no numérico → 1.
  - fit_column_span: recorta un colspan que choca con un span pendiente.
  - fit_row_span: recorta un rowspan que sobrepasa la última fila.
  - extend-on-overflow: una fila con más celdas que columnas libres ensancha
    la tabla (ver `required_width`).
"""
from __future__ import annotations
import re
from typing import Container, Optional

from .config import MAX_COLSPAN, MAX_ROWSPAN

_LEADING_INT_RE = re.compile(r"^\s*\+?(\d+)")


def normalize_span(raw: Optional[str], limit: int) -> int:
    """Convierte el valor de colspan/rowspan en un entero >= 1.

    Como los navegadores, acepta un prefijo numérico ("2px" → 2).
    """
    if raw is None:
        return 1
    m = _LEADING_INT_RE.match(str(raw))
    if not m:
        return 1
    value = int(m.group(1))
    if value < 1:
        return 1
    return min(value, limit)


def normalize_colspan(raw: Optional[str]) -> int:
    return normalize_span(raw, MAX_COLSPAN)


def normalize_rowspan(raw: Optional[str]) -> int:
    return normalize_span(raw, MAX_ROWSPAN)


def fit_column_span(start: int, declared: int, occupied: Container[int]) -> int:
    """Longitud de la racha de columnas libres desde `start`, como máximo `declared`.

    `start` siempre está libre, así que el resultado es >= 1.
    """
    span = 1
    while span < declared and (start + span) not in occupied:
        span += 1
    return span


def fit_row_span(origin_row: int, declared: int, row_count: int) -> int:
    return max(1, min(declared, row_count - origin_row))


def required_width(current: int, start: int, column_span: int) -> int:
    """Ancho de tabla necesario tras colocar una celda (extend-on-overflow)."""
    return max(current, start + column_span)
