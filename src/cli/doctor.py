"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.dns_client import build_resolver
from adapters.http_client import build_async_client, check_upstream
from cli.ui_components import load_settings
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ResolutionError
from core.resources_loader import DEFAULT_DOMAINS_FILE, load_domain_list

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console(stderr=True)

CHECK_DOMAIN = "onedrive.live.com"


async def _check_upstreams(settings: AppSettings) -> list[tuple[str, bool, str]]:
    async with build_async_client(settings) as client:
        results = await asyncio.gather(*(check_upstream(client, upstream) for upstream in settings.upstreams))
    return [
        (upstream.url, ok, detail)
        for upstream, (ok, detail) in zip(settings.upstreams, results)
    ]


async def _check_resolution(settings: AppSettings, domain: str) -> tuple[bool, str]:
    try:
        addresses = await build_resolver(settings).resolve(domain)
    except ResolutionError as exc:
        return False, exc.describe()
    except Exception as exc:
        return False, f"{exc.__class__.__name__}: {exc}"
    return True, ", ".join(str(address) for address in addresses)


@app.command()
def run(
    domain: str = typer.Option(CHECK_DOMAIN, "--domain", help="Domain used for the resolution check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings(_console)

    table = Table(title="onenote-hosts Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Timezone", "OK", settings.display_timezone or "system local time")
    table.add_row(
        "DNS limits",
        "OK",
        f"{settings.dns_max_concurrent_queries} queries in flight per lookup, "
        f"timeout {settings.dns_timeout_seconds}s, lifetime {settings.dns_lifetime_seconds}s",
    )
    if settings.lookup_timeout_seconds:
        table.add_row("Lookup deadline", "OK", f"{settings.lookup_timeout_seconds}s per domain")
    else:
        table.add_row("Lookup deadline", "OPTIONAL", "None -> resolver lifetime only")

    try:
        domain_count = len(load_domain_list(settings.domains_path))
        source = str(settings.domains_path or DEFAULT_DOMAINS_FILE)
        table.add_row("Domain list", "OK", f"{domain_count} domains from {source}")
    except FileNotFoundError as exc:
        table.add_row("Domain list", "FAIL", str(exc))

    # Connectivity (best-effort)
    for url, ok, detail in asyncio.run(_check_upstreams(settings)):
        table.add_row(f"DoH {url}", "OK" if ok else "FAIL", detail)

    ok_dns, detail_dns = asyncio.run(_check_resolution(settings, domain))
    table.add_row(f"Resolve {domain}", "OK" if ok_dns else "FAIL", detail_dns)

    _console.print(table)

    if not ok_dns:
        _console.print(
            "\n[yellow]Note:[/yellow] DoH traffic may be blocked; try other upstreams via ONENOTE_HOSTS_UPSTREAMS."
        )


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    timezone = typer.prompt(
        "Display timezone (IANA name, empty for system local time)",
        default="",
        show_default=False,
    ).strip()
    lookup_timeout = typer.prompt(
        "Per-domain lookup deadline in seconds (empty for none)",
        default="",
        show_default=False,
    ).strip()
    domains_path = typer.prompt(
        "Domain list path (empty for the bundled list)",
        default="",
        show_default=False,
    ).strip()

    values = {
        "ONENOTE_HOSTS_DISPLAY_TIMEZONE": timezone or None,
        "ONENOTE_HOSTS_LOOKUP_TIMEOUT_SECONDS": lookup_timeout or None,
        "ONENOTE_HOSTS_DOMAINS_PATH": domains_path or None,
    }

    # Validate before persisting.
    try:
        AppSettings(**{key.removeprefix("ONENOTE_HOSTS_").lower(): v for key, v in values.items() if v})
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
