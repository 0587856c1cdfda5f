from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Tag

from .cleaners import clean_cell_text
from .structures import PageMetadata, Table, TableMetadata

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _meta_content(soup: BeautifulSoup, *names: str) -> Optional[str]:
    """Busca <meta name=...> o <meta property=...> en el orden dado."""
    for name in names:
        for key in ("name", "property"):
            tag = soup.find("meta", attrs={key: name})
            if tag is not None and tag.get("content"):
                return tag["content"].strip()
    return None


def _text_or_none(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return clean_cell_text(tag.get_text(" ")) or None


def _attr_text(tag: Tag, attr: str) -> Optional[str]:
    value = tag.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _is_section(tag: Tag) -> bool:
    if tag.name in ("section", "article"):
        return True
    return tag.name == "div" and tag.get("role") == "main"


def extract_page_metadata(soup: BeautifulSoup, url: str) -> PageMetadata:
    """Extrae título y metadatos <meta> de la página."""
    return PageMetadata(
        url=url,
        title=_text_or_none(soup.find("title")),
        description=_meta_content(soup, "description", "og:description"),
        author=_meta_content(soup, "author"),
        published_date=_meta_content(soup, "article:published_time", "pubdate"),
        last_modified=_meta_content(soup, "article:modified_time", "lastmod"),
    )


def describe_table(tag: Tag, table: Table, position: int) -> TableMetadata:
    """
    Metadatos de una tabla: id, class, caption, sección contenedora y el
    encabezado h1-h6 más cercano que la precede.
    `position` es la posición (desde 1) entre todos los <table> del documento.
    """
    section = tag.find_parent(_is_section)
    parent_section = None
    if section is not None:
        parent_section = _attr_text(section, "id") or _attr_text(section, "class")

    return TableMetadata(
        position=position,
        row_count=table.row_count,
        column_count=table.column_count,
        header_row_count=table.header_row_count,
        footer_row_count=table.footer_row_count,
        id=_attr_text(tag, "id"),
        class_name=_attr_text(tag, "class"),
        caption=_text_or_none(tag.find("caption", recursive=False)),
        parent_section=parent_section,
        preceding_heading=_text_or_none(tag.find_previous(HEADING_TAGS)),
    )
