# src/html_table_extractor/cleaners.py
from __future__ import annotations
import re
from typing import List, Union

from .nodes import TableNode

_WS_RE = re.compile(r"[\s\u200b]+")

# Elementos que separan palabras aunque no haya espacios en el HTML
BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul", "caption",
})

# Contenido que nunca es texto visible de la celda
IGNORED_TAGS = frozenset({"script", "style", "template", "noscript"})


def clean_cell_text(text: str) -> str:
    """Limpia el texto de una celda: colapsa espacios y recorta extremos."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def _collect_text(node: TableNode, parts: List[str], skip_tables: bool) -> None:
    """Recorre el contenido en orden de documento con una pila explícita.

    Las cadenas en la pila son separadores pendientes (cierre de un bloque).
    """
    stack: List[Union[TableNode, str]] = list(reversed(list(node.children())))
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        name = item.name
        if name is None:
            parts.append(item.text())
            continue
        if name in IGNORED_TAGS:
            continue
        if name == "table" and skip_tables:
            parts.append(" ")
            continue
        if name in BLOCK_TAGS:
            parts.append(" ")
            stack.append(" ")
        stack.extend(reversed(list(item.children())))


def cell_text(node: TableNode, nested_text: str = "exclude") -> str:
    """
    Texto normalizado de una celda.

    Con nested_text="exclude" se omite el texto de las tablas anidadas, que
    se emiten como tablas independientes; con "flatten" se incluye.
    """
    parts: List[str] = []
    _collect_text(node, parts, skip_tables=(nested_text == "exclude"))
    return clean_cell_text("".join(parts))
