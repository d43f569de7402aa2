"""Domain list contract.

The working set is newline-separated text: one hostname per line. Parsing trims
lines, skips blanks and `#` comments, removes duplicates and sorts by the
reversed label sequence so subdomains group under their parent.
"""

from __future__ import annotations

from typing import Iterable


def domain_sort_key(domain: str) -> tuple[str, ...]:
    """`a.b.example.com` -> `("com", "example", "b", "a")`."""

    return tuple(reversed(domain.split(".")))


def sort_domains(domains: Iterable[str]) -> list[str]:
    return sorted(set(domains), key=domain_sort_key)


def parse_domain_list(text: str) -> list[str]:
    domains: set[str] = set()
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        domains.add(line)
    return sort_domains(domains)
