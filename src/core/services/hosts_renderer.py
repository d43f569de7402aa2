"""Hosts fragment rendering.

Pure formatting: takes classified results, section flags and timing metadata
and returns the full document. No I/O, no clock access, safe to call repeatedly.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from core.domain.models import ClassifiedResults, ResolvedAddress

START_MARKER = "####### Onenote Hosts Start #######"
END_MARKER = "####### Onenote Hosts End #######"
PROVENANCE = "# This file is generated by https://github.com/Zxilly/OnedriveHostsGenerator"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def column_widths(pairs: Sequence[ResolvedAddress]) -> tuple[int, int]:
    """Widest address text and widest domain in `pairs` (0, 0 when empty)."""

    address_width = max((len(str(pair.address)) for pair in pairs), default=0)
    domain_width = max((len(pair.domain) for pair in pairs), default=0)
    return address_width, domain_width


def format_address_lines(
    pairs: Sequence[ResolvedAddress],
    *,
    single_per_domain: bool = False,
) -> list[str]:
    address_width, domain_width = column_widths(pairs)

    lines: list[str] = []
    printed: set[str] = set()
    for pair in pairs:
        if single_per_domain and pair.domain in printed:
            continue
        printed.add(pair.domain)
        lines.append(f"{str(pair.address):<{address_width}} {pair.domain:>{domain_width}}")
    return lines


def render_document(
    *,
    results: ClassifiedResults,
    include_ipv4: bool,
    include_ipv6: bool,
    single_per_domain: bool,
    generated_at: datetime,
    elapsed_ms: int,
) -> str:
    lines: list[str] = [
        START_MARKER,
        PROVENANCE,
        f"# Generate time: {generated_at.strftime(TIMESTAMP_FORMAT)}",
        f"# Generate in: {elapsed_ms} ms",
    ]

    if results.unresolved:
        lines.extend(["", "# Unresolved domains"])
        lines.extend(f"# {domain} not resolved" for domain in results.unresolved)

    if include_ipv4:
        lines.extend(["", "# IPv4 addresses:"])
        lines.extend(format_address_lines(results.ipv4, single_per_domain=single_per_domain))

    if include_ipv6:
        lines.append("")
        lines.append("# IPv6 addresses:" if results.ipv6 else "# No IPv6 addresses resolved")
        lines.extend(format_address_lines(results.ipv6, single_per_domain=single_per_domain))

    lines.append(END_MARKER)
    # Trailing blank line after the end marker.
    return "\n".join(lines) + "\n\n"
