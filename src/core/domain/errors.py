"""Errors raised by resolver implementations."""

from __future__ import annotations


class ResolutionError(Exception):
    """A single domain could not be resolved to any address.

    Always recoverable: the pipeline routes the domain to the unresolved list.
    """

    def __init__(self, domain: str, cause: BaseException | str) -> None:
        self.domain = domain
        self.cause = cause
        super().__init__(f"{domain}: {cause}")

    def describe(self) -> str:
        cause = self.cause
        if isinstance(cause, BaseException):
            text = str(cause).strip()
            return text or cause.__class__.__name__
        return cause
