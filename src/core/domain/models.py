"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* produce una pasada de resolución, no *cómo* se
obtiene: el resolver y el orquestador viven en adapters/services.
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

IPAddress = IPv4Address | IPv6Address


class ResolvedAddress(BaseModel):
    """Un par (dominio, dirección) listo para una línea del hosts."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., min_length=1, description="Dominio consultado.")
    address: IPAddress = Field(..., description="Dirección IPv4 o IPv6 resuelta.")

    @property
    def family(self) -> int:
        return self.address.version


class ResolutionOutcome(BaseModel):
    """Resultado por dominio: direcciones resueltas o un fallo.

    `fault` distingue un fallo de la tarea (infraestructura) de un fallo DNS.
    """

    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., min_length=1)
    addresses: list[IPAddress] = Field(
        default_factory=list,
        description="Direcciones en el orden devuelto por el resolver.",
    )
    error: str | None = Field(default=None, description="Causa del fallo, si lo hubo.")
    fault: bool = Field(default=False, description="True si falló la tarea, no el DNS.")

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.addresses)

    @classmethod
    def resolved(cls, domain: str, addresses: Sequence[IPAddress]) -> "ResolutionOutcome":
        if not addresses:
            return cls(domain=domain, error="no addresses returned")
        return cls(domain=domain, addresses=list(addresses))

    @classmethod
    def failed(cls, domain: str, error: str, *, fault: bool = False) -> "ResolutionOutcome":
        return cls(domain=domain, error=error or "unknown error", fault=fault)


class ClassifiedResults(BaseModel):
    """Las tres listas que consume el renderer."""

    ipv4: list[ResolvedAddress] = Field(default_factory=list)
    ipv6: list[ResolvedAddress] = Field(default_factory=list)
    unresolved: list[str] = Field(
        default_factory=list,
        description="Dominios sin resolver, uno por fallo.",
    )

    def resolved_domains(self) -> set[str]:
        return {pair.domain for pair in self.ipv4} | {pair.domain for pair in self.ipv6}
