"""CLI principal (Typer).

La CLI es solo el borde: carga configuración, construye el pipeline una vez y
decide dónde va el documento (stdout o fichero). Progreso, avisos y resumen
van a stderr con Rich.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from adapters.hosts_exporter import export_hosts_file, export_results_json
from cli import doctor
from cli.ui_components import build_summary_table, load_settings, print_banner
from core.resources_loader import load_domain_list
from core.services.hosts_pipeline import PipelineHooks, build_hosts_generator

app = typer.Typer(
    no_args_is_help=True,
    help="Resolve OneDrive / OneNote domains over DoH and print a hosts fragment.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console(stderr=True)


@app.command()
def generate(
    ipv4: bool = typer.Option(True, "--ipv4/--no-ipv4", help="Include the IPv4 section."),
    ipv6: bool = typer.Option(True, "--ipv6/--no-ipv6", help="Include the IPv6 section."),
    single: bool = typer.Option(False, "--single", help="At most one address per domain and family."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the fragment here instead of stdout."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also dump classified results as JSON."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner, progress or summary."),
) -> None:
    """Resolve every domain and render the hosts fragment."""

    settings = load_settings(_console)

    if not quiet:
        print_banner(_console)

    progress = Progress(
        TextColumn("[bold cyan]Resolving"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[dim]{task.description}"),
        console=_console,
        transient=True,
        disable=quiet,
    )
    task_id = progress.add_task("", total=None)

    hooks = PipelineHooks(
        warning=lambda message: progress.console.print(f"[yellow]{message}[/yellow]"),
        lookup_start=lambda total: progress.update(task_id, total=total),
        lookup_progress=lambda done, total, domain: progress.update(task_id, completed=done, description=domain),
    )

    try:
        generator = build_hosts_generator(settings, hooks)
    except FileNotFoundError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    with progress:
        document, results = asyncio.run(
            generator.render_with_results(
                include_ipv4=ipv4,
                include_ipv6=ipv6,
                single_per_domain=single,
            )
        )

    if output is not None:
        path = export_hosts_file(document=document, output_path=output)
        if not quiet:
            _console.print(f"[green]Hosts fragment written to:[/green] {path}")
    else:
        typer.echo(document, nl=False)

    if json_path is not None:
        path = export_results_json(results=results, output_path=json_path)
        if not quiet:
            _console.print(f"[green]Results written to:[/green] {path}")

    if not quiet:
        _console.print(build_summary_table(results, total_domains=len(generator.domains)))


@app.command()
def domains() -> None:
    """Print the working domain list (de-duplicated, sorted by reversed labels)."""

    settings = load_settings(_console)
    try:
        domain_list = load_domain_list(settings.domains_path)
    except FileNotFoundError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    for domain in domain_list:
        typer.echo(domain)


def run() -> None:
    app()
