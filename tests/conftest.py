"""Shared test doubles: an in-memory resolver and a fixed clock."""

from __future__ import annotations

import asyncio
from datetime import datetime, tzinfo
from ipaddress import ip_address

from core.domain.errors import ResolutionError
from core.domain.models import IPAddress


class FakeResolver:
    """`AddressResolver` double.

    `answers` maps a domain to a list of address strings, or to an exception
    instance to raise. Unknown domains fail with `ResolutionError`.
    `delays` lets tests control completion order.
    """

    def __init__(
        self,
        answers: dict[str, list[str] | BaseException],
        *,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.answers = answers
        self.delays = delays or {}
        self.calls: list[str] = []

    async def resolve(self, domain: str) -> list[IPAddress]:
        self.calls.append(domain)
        await asyncio.sleep(self.delays.get(domain, 0))
        answer = self.answers.get(domain)
        if answer is None:
            raise ResolutionError(domain, "NXDOMAIN")
        if isinstance(answer, BaseException):
            raise answer
        return [ip_address(value) for value in answer]


FIXED_NOW = datetime(2024, 5, 17, 8, 30, 15)


def fixed_clock(tz: tzinfo | None) -> datetime:
    return FIXED_NOW.replace(tzinfo=tz)
