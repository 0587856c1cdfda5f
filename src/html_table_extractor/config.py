from __future__ import annotations
from dataclasses import dataclass

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PARSER = "lxml"

# Límites que aplican los navegadores a colspan / rowspan
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534

NESTED_TEXT_MODES = ("exclude", "flatten")
OUTPUT_FORMATS = ("json", "csv")
JSON_FORMS = ("object", "array")


@dataclass(frozen=True)
class ExtractionOptions:
    """Opciones del GridBuilder.

    include_nested: emitir las tablas anidadas como entradas independientes.
    nested_text: "exclude" deja fuera del texto de la celda padre el texto de
    la tabla anidada; "flatten" lo incluye normalizado.
    """
    include_nested: bool = True
    nested_text: str = "exclude"

    def __post_init__(self) -> None:
        if self.nested_text not in NESTED_TEXT_MODES:
            raise ValueError(
                f"nested_text desconocido: {self.nested_text!r} (use uno de {NESTED_TEXT_MODES})"
            )
