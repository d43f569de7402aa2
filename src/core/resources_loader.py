"""Cargador de la lista de dominios.

Este módulo vive en `core/` porque:
- centraliza el *qué* dominios resolvemos sin acoplarse a la CLI
- evita duplicar lógica de paths en adaptadores y tests.

La lista por defecto viaja dentro del paquete (`core/resources/domains.txt`);
`ONENOTE_HOSTS_DOMAINS_PATH` permite sustituirla.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.domain_list import parse_domain_list

_RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_DOMAINS_FILE = _RESOURCES_DIR / "domains.txt"


def load_domain_list(path: Path | None = None) -> list[str]:
    """Carga y normaliza la lista de dominios.

    Orden:
    1) `path` si se indica (debe existir)
    2) la lista empaquetada

    Devuelve dominios únicos ordenados por etiquetas invertidas.
    """

    source = path or DEFAULT_DOMAINS_FILE
    if not source.is_file():
        raise FileNotFoundError(f"Domain list not found: {source}")
    return parse_domain_list(source.read_text(encoding="utf-8"))
