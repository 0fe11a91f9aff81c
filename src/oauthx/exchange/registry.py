"""Provider registry: read-only lookup of adapters by provider id."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from .adapter import ProviderAdapter
from .errors import UnknownProvider
from .providers import BUILTIN_PROVIDERS

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Immutable mapping of provider id to :class:`ProviderAdapter`.

    The registry is populated once and never mutated, so concurrent lookups
    need no locking. Use :meth:`with_adapters` to derive a new registry.
    """

    def __init__(self, adapters: Iterable[ProviderAdapter]):
        table: dict[str, ProviderAdapter] = {}
        for adapter in adapters:
            if adapter.provider_id in table:
                raise ValueError(f"Duplicate provider id '{adapter.provider_id}'")
            table[adapter.provider_id] = adapter
        self._adapters = MappingProxyType(table)

    def lookup(self, provider_id: str) -> ProviderAdapter:
        """Return the adapter for ``provider_id`` (case-insensitive).

        Raises:
            UnknownProvider: If no adapter is registered under that id.
        """
        if not isinstance(provider_id, str):
            raise UnknownProvider(str(provider_id))
        try:
            return self._adapters[provider_id.strip().lower()]
        except KeyError:
            raise UnknownProvider(provider_id) from None

    def with_adapters(self, adapters: Iterable[ProviderAdapter]) -> ProviderRegistry:
        """New registry with ``adapters`` added, replacing same-id entries."""
        table = dict(self._adapters)
        for adapter in adapters:
            if adapter.provider_id in table:
                logger.debug(f"Replacing provider adapter '{adapter.provider_id}'")
            table[adapter.provider_id] = adapter
        return ProviderRegistry(table.values())

    def provider_ids(self) -> list[str]:
        return sorted(self._adapters)

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and provider_id.strip().lower() in self._adapters

    def __iter__(self) -> Iterator[ProviderAdapter]:
        return iter(self._adapters[key] for key in self.provider_ids())

    def __len__(self) -> int:
        return len(self._adapters)

    def __repr__(self) -> str:
        return f"ProviderRegistry({self.provider_ids()!r})"


def default_registry() -> ProviderRegistry:
    """Registry with the built-in providers (Teams, Apollo, Quickbooks)."""
    return ProviderRegistry(BUILTIN_PROVIDERS)


__all__ = ["ProviderRegistry", "default_registry"]
