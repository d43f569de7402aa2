"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (DNS/HTTP) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "onenote-hosts"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "onenote-hosts"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "onenote-hosts"
    return Path.home() / ".config" / "onenote-hosts"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# onenote-hosts user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class UpstreamServer(BaseModel):
    """Un resolvedor DNS-over-HTTPS.

    `bootstrap_address` evita depender del DNS del sistema para resolver el
    hostname del propio endpoint.
    """

    url: str = Field(..., min_length=8, description="Endpoint RFC 8484 (https://.../dns-query).")
    bootstrap_address: str | None = Field(
        default=None,
        description="IP a la que conectar para `url` (opcional).",
    )

    @field_validator("url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if not value.startswith("https://"):
            raise ValueError("upstream url must use https://")
        return value


QUAD9_DOH_URL = "https://dns.quad9.net/dns-query"
CLOUDFLARE_DOH_URL = "https://cloudflare-dns.com/dns-query"

DEFAULT_UPSTREAMS: tuple[UpstreamServer, ...] = (
    UpstreamServer(url=QUAD9_DOH_URL, bootstrap_address="9.9.9.9"),
    UpstreamServer(url=QUAD9_DOH_URL, bootstrap_address="149.112.112.112"),
    UpstreamServer(url=CLOUDFLARE_DOH_URL, bootstrap_address="1.1.1.1"),
    UpstreamServer(url=CLOUDFLARE_DOH_URL, bootstrap_address="1.0.0.1"),
)


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ONENOTE_HOSTS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    upstreams: list[UpstreamServer] = Field(
        default_factory=lambda: list(DEFAULT_UPSTREAMS),
        min_length=2,
        description="Resolvedores DoH; al menos dos para redundancia.",
    )
    dns_max_concurrent_queries: int = Field(
        default=2,
        ge=1,
        le=64,
        description="Consultas DNS simultáneas máximas por dominio (A + AAAA).",
    )
    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout por intento contra un nameserver (segundos).",
    )
    dns_lifetime_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Tiempo total por consulta, rotando nameservers (segundos).",
    )
    lookup_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline opcional por dominio (A + AAAA).",
    )

    display_timezone: str | None = Field(
        default=None,
        description="Zona horaria IANA para la cabecera; None = hora local del sistema.",
    )
    domains_path: Path | None = Field(
        default=None,
        description="Lista de dominios alternativa (un dominio por línea).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de las comprobaciones HTTP del doctor (segundos).",
    )
    user_agent: str = Field(
        default="onenote-hosts/0.1 (+https://github.com/Zxilly/OnedriveHostsGenerator)",
        min_length=1,
        description="User-Agent para comprobaciones HTTP.",
    )

    @field_validator("display_timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value.strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value!r}") from exc
        return value.strip()

    def tzinfo(self) -> tzinfo | None:
        return ZoneInfo(self.display_timezone) if self.display_timezone else None
