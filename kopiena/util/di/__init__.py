"""Dependency injection wiring.

Every provider class is listed once in ``PROVIDERS``. A provider with
subclasses is a mockable component: the container picks the subclass whose
``__is_mock__`` flag matches, so tests can swap Postgres for in-memory
storage without touching the rest of the graph.
"""

from typing import Type

from kopiena.util.di.application import ProdApplicationProvider
from kopiena.util.di.base import Component, ProviderBase
from kopiena.util.di.core import ProdConfigProvider
from kopiena.util.di.domain import ProdDomainProvider
from kopiena.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        ``base`` itself when it is concrete, otherwise the matching subclass

    Raises:
        ValueError: If a mockable component lacks the requested implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
