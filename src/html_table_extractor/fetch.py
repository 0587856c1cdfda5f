from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

log = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """No se pudo obtener el documento HTML."""


def fetch_html(
    url: str,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Descarga `url` y devuelve el cuerpo como texto.

    Lanza FetchError si la petición falla o la respuesta no es 2xx.
    """
    own_session = session is None
    session = session or requests.Session()
    try:
        log.info("Descargando URL: %s", url)
        try:
            resp = session.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Error de red al descargar {url}: {exc}") from exc

        if not resp.ok:
            raise FetchError(f"No se pudo descargar la URL: HTTP {resp.status_code} {resp.reason or ''}".strip())

        # requests usa ISO-8859-1 si el servidor no declara charset
        if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
            resp.encoding = resp.apparent_encoding or resp.encoding
        log.debug("Respuesta HTTP %d, %d caracteres.", resp.status_code, len(resp.text))
        return resp.text
    finally:
        if own_session:
            session.close()


def read_html_file(path: str) -> str:
    log.info("Leyendo HTML local: %s", path)
    return Path(path).read_text(encoding="utf-8", errors="replace")
