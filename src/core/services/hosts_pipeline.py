"""Hosts generation orchestration.

The CLI delegates the whole resolve -> classify -> render flow to these
helpers, which keeps side-effects (printing, progress bars, file writes) out of
the core and makes the pipeline reusable from tests and other entry-points.
Dependencies (resolver, domain list) are passed in explicitly.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, Iterable, Sequence

from adapters.dns_client import build_resolver
from core.config import AppSettings
from core.domain.errors import ResolutionError
from core.domain.models import ClassifiedResults, ResolutionOutcome, ResolvedAddress
from core.interfaces.resolver import AddressResolver
from core.resources_loader import load_domain_list
from core.services.hosts_renderer import render_document


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    lookup_start: Callable[[int], None] | None = None
    lookup_progress: Callable[[int, int, str], None] | None = None


async def _lookup(
    resolver: AddressResolver,
    domain: str,
    lookup_timeout: float | None,
) -> ResolutionOutcome:
    try:
        if lookup_timeout is None:
            addresses = await resolver.resolve(domain)
        else:
            addresses = await asyncio.wait_for(resolver.resolve(domain), lookup_timeout)
    except ResolutionError as exc:
        return ResolutionOutcome.failed(domain, exc.describe())
    except asyncio.TimeoutError:
        return ResolutionOutcome.failed(domain, f"lookup timed out after {lookup_timeout}s")
    return ResolutionOutcome.resolved(domain, addresses)


async def resolve_all(
    *,
    resolver: AddressResolver,
    domains: Iterable[str],
    hooks: PipelineHooks | None = None,
    lookup_timeout: float | None = None,
) -> list[ResolutionOutcome]:
    """Resolve every domain concurrently; one outcome per domain, completion order.

    A task that dies for any reason other than `ResolutionError` is reported
    through `hooks.warning` and recorded as a failed outcome with `fault=True`.
    """

    hooks = hooks or PipelineHooks()

    pending: dict[asyncio.Task[ResolutionOutcome], str] = {
        asyncio.create_task(_lookup(resolver, domain, lookup_timeout), name=f"resolve:{domain}"): domain
        for domain in domains
    }
    total = len(pending)
    if hooks.lookup_start:
        hooks.lookup_start(total)

    outcomes: list[ResolutionOutcome] = []
    while pending:
        done, _ = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            domain = pending.pop(task)
            if task.cancelled():
                outcome = ResolutionOutcome.failed(domain, "lookup task cancelled", fault=True)
            elif task.exception() is not None:
                exc = task.exception()
                outcome = ResolutionOutcome.failed(
                    domain,
                    f"{exc.__class__.__name__}: {exc}",
                    fault=True,
                )
            else:
                outcome = task.result()

            if not outcome.ok and hooks.warning:
                if outcome.fault:
                    hooks.warning(f"Lookup task for {domain} failed: {outcome.error}")
                else:
                    hooks.warning(f"Resolve {domain} failed: {outcome.error}")

            outcomes.append(outcome)
            if hooks.lookup_progress:
                hooks.lookup_progress(len(outcomes), total, domain)

    return outcomes


def classify(
    outcomes: Iterable[ResolutionOutcome],
    *,
    domains: Sequence[str] | None = None,
    warning: Callable[[str], None] | None = None,
) -> ClassifiedResults:
    """Split outcomes into IPv4 pairs, IPv6 pairs and unresolved domains.

    With `domains`, every domain owns one slot and results follow that order;
    a domain without an outcome is reported as unresolved. Outcomes for
    domains outside the list are skipped and reported through `warning`.
    """

    ordered: list[ResolutionOutcome]
    if domains is None:
        ordered = list(outcomes)
    else:
        slots: dict[str, ResolutionOutcome | None] = {domain: None for domain in domains}
        for outcome in outcomes:
            if outcome.domain not in slots:
                if warning:
                    warning(f"Ignoring outcome for unexpected domain {outcome.domain}")
                continue
            slots[outcome.domain] = outcome
        ordered = [
            outcome if outcome is not None else ResolutionOutcome.failed(domain, "no outcome", fault=True)
            for domain, outcome in slots.items()
        ]

    results = ClassifiedResults()
    for outcome in ordered:
        if not outcome.ok:
            results.unresolved.append(outcome.domain)
            continue
        for address in outcome.addresses:
            pair = ResolvedAddress(domain=outcome.domain, address=address)
            if pair.family == 4:
                results.ipv4.append(pair)
            else:
                results.ipv6.append(pair)
    return results


def _now(tz: tzinfo | None) -> datetime:
    return datetime.now(tz)


@dataclass
class HostsGenerator:
    """Resolve-and-render pipeline with its collaborators injected."""

    resolver: AddressResolver
    domains: Sequence[str]
    display_timezone: tzinfo | None = None
    lookup_timeout: float | None = None
    hooks: PipelineHooks = field(default_factory=PipelineHooks)
    clock: Callable[[tzinfo | None], datetime] = _now

    async def resolve(self) -> ClassifiedResults:
        outcomes = await resolve_all(
            resolver=self.resolver,
            domains=self.domains,
            hooks=self.hooks,
            lookup_timeout=self.lookup_timeout,
        )
        return classify(outcomes, domains=self.domains, warning=self.hooks.warning)

    async def render_with_results(
        self,
        include_ipv4: bool = True,
        include_ipv6: bool = True,
        single_per_domain: bool = False,
    ) -> tuple[str, ClassifiedResults]:
        generated_at = self.clock(self.display_timezone)
        started = time.perf_counter()
        results = await self.resolve()
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        document = render_document(
            results=results,
            include_ipv4=include_ipv4,
            include_ipv6=include_ipv6,
            single_per_domain=single_per_domain,
            generated_at=generated_at,
            elapsed_ms=elapsed_ms,
        )
        return document, results

    async def render(
        self,
        include_ipv4: bool = True,
        include_ipv6: bool = True,
        single_per_domain: bool = False,
    ) -> str:
        document, _ = await self.render_with_results(include_ipv4, include_ipv6, single_per_domain)
        return document


def build_hosts_generator(
    settings: AppSettings,
    hooks: PipelineHooks | None = None,
) -> HostsGenerator:
    """Wire the DoH resolver and the domain list once, at startup."""

    return HostsGenerator(
        resolver=build_resolver(settings),
        domains=load_domain_list(settings.domains_path),
        display_timezone=settings.tzinfo(),
        lookup_timeout=settings.lookup_timeout_seconds,
        hooks=hooks or PipelineHooks(),
    )
