"""Built-in provider adapters."""

from ..adapter import ProviderAdapter
from .apollo import APOLLO
from .quickbooks import QUICKBOOKS
from .teams import TEAMS

BUILTIN_PROVIDERS: tuple[ProviderAdapter, ...] = (TEAMS, APOLLO, QUICKBOOKS)

__all__ = ["APOLLO", "BUILTIN_PROVIDERS", "QUICKBOOKS", "TEAMS"]
