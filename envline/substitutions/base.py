"""Substitution protocol and ordered provider pipeline.

Responsibilities:
- Define the protocol every substitution provider implements.
- Pipe one decoded value through providers in registration order.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol

from ..models.datatypes import QuoteKind


class Substitution(Protocol):
    """Protocol for value substitution providers.

    Providers read `env` (the mapping built so far) but never mutate it.
    """

    def resolve(self, value: str, env: Mapping[str, str], is_load: bool) -> str:
        """Return `value` with this provider's references resolved."""


class SubstitutionPipeline:
    """Ordered, immutable chain of substitution providers."""

    def __init__(self, providers: Iterable[Substitution] = ()) -> None:
        self._providers = tuple(providers)

    @property
    def providers(self) -> tuple[Substitution, ...]:
        return self._providers

    def apply(
        self,
        value: str,
        quote: QuoteKind,
        env: Mapping[str, str],
        is_load: bool = False,
    ) -> str:
        """Run every provider over `value` unless it was single-quoted."""

        if quote is QuoteKind.SINGLE:
            return value
        for provider in self._providers:
            value = provider.resolve(value, env, is_load)
        return value

    def __len__(self) -> int:
        return len(self._providers)
