"""Exportación del documento y de los resultados.

Por qué está en adapters:
- Escribir a disco es un detalle de infraestructura; el Core solo devuelve
  el documento (`str`) y `ClassifiedResults`.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ClassifiedResults


def export_hosts_file(*, document: str, output_path: Path) -> Path:
    """Escribe el fragmento hosts tal cual (UTF-8, sin transformar saltos de línea)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8", newline="\n")
    return output_path


def export_results_json(*, results: ClassifiedResults, output_path: Path) -> Path:
    """Exporta `ClassifiedResults` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = results.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
