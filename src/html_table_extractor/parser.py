# src/html_table_extractor/parser.py
from __future__ import annotations
import logging
from typing import Tuple

from bs4 import BeautifulSoup, FeatureNotFound

from .config import DEFAULT_PARSER
from .nodes import SoupNode

log = logging.getLogger(__name__)


def _load_soup(text: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parsea el HTML con el backend pedido (lxml por defecto)."""
    try:
        return BeautifulSoup(text, parser)
    except FeatureNotFound as exc:
        raise ValueError(f"Parser HTML no disponible: {parser!r} (pruebe 'lxml' o 'html.parser')") from exc


def parse_html_document(text: str, parser: str = DEFAULT_PARSER) -> Tuple[BeautifulSoup, SoupNode]:
    """Devuelve el documento de BeautifulSoup y su raíz adaptada a TableNode."""
    soup = _load_soup(text or "", parser)
    log.debug("Documento parseado con %s.", parser)
    return soup, SoupNode(soup)
