"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Todo se imprime en stderr: stdout queda reservado para el documento.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.models import ClassifiedResults


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("onenote-hosts", style="bold cyan")
    subtitle = Text("DoH resolution • hosts fragment for OneDrive / OneNote", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_summary_table(results: ClassifiedResults, *, total_domains: int) -> Table:
    """Resumen de una pasada: dominios resueltos, direcciones por familia, fallos."""

    table = Table(title="Resolution summary")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", justify="right")
    table.add_row("Domains", str(total_domains))
    table.add_row("Resolved", str(len(results.resolved_domains())))
    table.add_row("IPv4 addresses", str(len(results.ipv4)))
    table.add_row("IPv6 addresses", str(len(results.ipv6)))
    table.add_row("Unresolved", str(len(results.unresolved)), style="red" if results.unresolved else None)
    return table


def load_settings(console: Console) -> AppSettings:
    """Carga `AppSettings`; si la configuración es inválida, informa y sale con código 2."""

    try:
        return AppSettings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=2) from exc
