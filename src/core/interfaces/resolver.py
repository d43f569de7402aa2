"""Contrato del resolver DNS.

Por qué Protocol:
- El pipeline solo necesita "dominio -> direcciones o fallo".
- Permite sustituir el cliente DoH por dobles de test sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import IPAddress


@runtime_checkable
class AddressResolver(Protocol):
    """Resuelve un dominio a sus direcciones IPv4/IPv6.

    Reglas de diseño:
    - `resolve` es asíncrono y debe tolerar llamadas concurrentes ilimitadas.
    - Devuelve una lista no vacía o lanza `core.domain.errors.ResolutionError`.
    - Sin reintentos: la política de reintentos pertenece al orquestador.
    """

    async def resolve(self, domain: str) -> list[IPAddress]:
        ...
