"""Resolver DNS-over-HTTPS (dnspython).

Por qué un adaptador:
- Estandariza upstreams, timeouts y límite de concurrencia en un solo sitio.
- El pipeline solo ve `AddressResolver`; los tests pueden usar un doble.

Estrategia:
- A y AAAA en paralelo por dominio; éxito si cualquiera de las dos responde.
- Un semáforo por dominio limita sus consultas en vuelo (A + AAAA);
  las búsquedas de dominios distintos corren en paralelo sin tope global.
- Sin caché: cada pasada resuelve de nuevo.
"""

from __future__ import annotations

import asyncio
from ipaddress import ip_address

import dns.asyncresolver
import dns.exception
import dns.nameserver

from core.config import AppSettings, UpstreamServer
from core.domain.errors import ResolutionError
from core.domain.models import IPAddress

_RDTYPES = ("A", "AAAA")


def build_nameservers(upstreams: list[UpstreamServer]) -> list[dns.nameserver.Nameserver]:
    return [
        dns.nameserver.DoHNameserver(upstream.url, bootstrap_address=upstream.bootstrap_address)
        for upstream in upstreams
    ]


def build_async_resolver(settings: AppSettings) -> dns.asyncresolver.Resolver:
    """Crea un `dns.asyncresolver.Resolver` sin leer /etc/resolv.conf."""

    resolver = dns.asyncresolver.Resolver(configure=False)
    resolver.nameservers = build_nameservers(settings.upstreams)
    resolver.timeout = settings.dns_timeout_seconds
    resolver.lifetime = settings.dns_lifetime_seconds
    return resolver


class DohResolver:
    """Implementa `AddressResolver` sobre DoH (Quad9 + Cloudflare por defecto)."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        resolver: dns.asyncresolver.Resolver | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._resolver = resolver or build_async_resolver(self._settings)

    async def _query(self, domain: str, rdtype: str, limit: asyncio.Semaphore) -> list[IPAddress]:
        async with limit:
            answer = await self._resolver.resolve(domain, rdtype, raise_on_no_answer=False)
        return [ip_address(rdata.address) for rdata in answer]

    async def resolve(self, domain: str) -> list[IPAddress]:
        # Cap is per lookup; concurrent lookups never wait on each other.
        limit = asyncio.Semaphore(self._settings.dns_max_concurrent_queries)
        results = await asyncio.gather(
            *(self._query(domain, rdtype, limit) for rdtype in _RDTYPES),
            return_exceptions=True,
        )

        addresses: list[IPAddress] = []
        errors: list[BaseException] = []
        for result in results:
            if isinstance(result, dns.exception.DNSException):
                errors.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                addresses.extend(result)

        if addresses:
            return addresses
        if errors:
            raise ResolutionError(domain, errors[0])
        raise ResolutionError(domain, "no A or AAAA records")


def build_resolver(settings: AppSettings) -> DohResolver:
    return DohResolver(settings)
