from __future__ import annotations
from typing import Iterator, Optional, Protocol, Union

from bs4 import NavigableString, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    ProcessingInstruction,
    Script,
    Stylesheet,
    TemplateString,
)

# Cadenas que no forman parte del texto visible del documento
_SKIPPED_STRINGS = (
    Comment,
    CData,
    Declaration,
    Doctype,
    ProcessingInstruction,
    Script,
    Stylesheet,
    TemplateString,
)


class TableNode(Protocol):
    """Interfaz mínima que el GridBuilder necesita de un árbol HTML.

    `name` es None para nodos de texto.
    """

    @property
    def name(self) -> Optional[str]: ...

    def get(self, attr: str) -> Optional[str]: ...

    def children(self) -> Iterator["TableNode"]: ...

    def text(self) -> str: ...


class SoupNode:
    """Adaptador de un nodo de BeautifulSoup (Tag o NavigableString) a TableNode."""

    __slots__ = ("raw",)

    def __init__(self, raw: Union[Tag, NavigableString]) -> None:
        self.raw = raw

    @property
    def name(self) -> Optional[str]:
        if isinstance(self.raw, Tag):
            return (self.raw.name or "").lower()
        return None

    def get(self, attr: str) -> Optional[str]:
        if not isinstance(self.raw, Tag):
            return None
        value = self.raw.get(attr)
        if isinstance(value, list):
            # bs4 devuelve los atributos multivaluados (class) como lista
            return " ".join(value)
        return value

    def children(self) -> Iterator["SoupNode"]:
        if not isinstance(self.raw, Tag):
            return
        for child in self.raw.children:
            if isinstance(child, Tag):
                yield SoupNode(child)
            elif isinstance(child, NavigableString) and not isinstance(child, _SKIPPED_STRINGS):
                yield SoupNode(child)

    def text(self) -> str:
        if isinstance(self.raw, Tag):
            return self.raw.get_text(" ")
        return str(self.raw)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other.raw is self.raw

    def __hash__(self) -> int:
        return id(self.raw)

    def __repr__(self) -> str:
        return f"SoupNode({self.name or 'text'})"
