from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import (
    DEFAULT_PARSER,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    JSON_FORMS,
    NESTED_TEXT_MODES,
    OUTPUT_FORMATS,
    ExtractionOptions,
)
from .fetch import FetchError
from .main import run_extraction

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extrae las tablas de una página web a JSON o CSV.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-u", "--url", type=str, help="URL de la página de la que extraer tablas")
    source.add_argument("--html-file", type=str, help="Archivo HTML local en lugar de una URL")
    parser.add_argument("-o", "--output", type=str,
                        help="Archivo de salida (default: stdout). Con --split, directorio de salida")
    parser.add_argument("-f", "--format", type=str, default="json", choices=OUTPUT_FORMATS,
                        help="Formato de salida (default: json)")
    parser.add_argument("--json-form", type=str, default="object", choices=JSON_FORMS,
                        help="'object' con metadatos y cabeceras separadas, o 'array' de filas (default: object)")
    parser.add_argument("--split", action="store_true",
                        help="Con --format csv, escribe un table_<n>.csv por tabla en --output")
    parser.add_argument("--fill-spans", action="store_true",
                        help="Repite el texto de las celdas con rowspan/colspan en todas sus posiciones")
    parser.add_argument("--no-nested", action="store_true",
                        help="No emitir las tablas anidadas como tablas independientes")
    parser.add_argument("--nested-text", type=str, default="exclude", choices=NESTED_TEXT_MODES,
                        help="Incluir o no el texto de tablas anidadas en la celda padre (default: exclude)")
    parser.add_argument("--parser", type=str, default=DEFAULT_PARSER,
                        help=f"Backend de BeautifulSoup (default: {DEFAULT_PARSER})")
    parser.add_argument("--user-agent", type=str, default=DEFAULT_USER_AGENT,
                        help="User-Agent para las peticiones HTTP")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                        help=f"Timeout HTTP en segundos (default: {DEFAULT_TIMEOUT:g})")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.split and (args.format != "csv" or not args.output):
        parser.error("--split requiere --format csv y --output")

    # El log va a stderr para no mezclarse con la salida en stdout
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s",
                        stream=sys.stderr)

    try:
        run_extraction(
            args.url,
            html_file=args.html_file,
            output=args.output,
            fmt=args.format,
            json_form=args.json_form,
            split=args.split,
            fill_spans=args.fill_spans,
            options=ExtractionOptions(include_nested=not args.no_nested, nested_text=args.nested_text),
            parser=args.parser,
            user_agent=args.user_agent,
            timeout=args.timeout,
        )
        log.info("✔ Proceso completado.")
    except FileNotFoundError:
        log.error(f"Error: No se encontró el archivo de entrada: {args.html_file}")
        sys.exit(1)
    except FetchError as e:
        log.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
