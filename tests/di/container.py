"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from kopiena.util.di import PROVIDERS, Component, get_provider, mockable_components


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked by default.

    Args:
        unmock: Components to run against their production implementation

    Returns:
        Configured test container

    Raises:
        ValueError: If an unknown component is requested

    Examples:
        # Unit tests: in-memory storage
        container = build_test_container()

        # Integration tests: real Postgres, assumed running and migrated
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = [
        get_provider(base, use_mock=base.__mock_component__ not in unmock)()
        if base.__subclasses__()
        else base()
        for base in PROVIDERS
    ]

    # FastapiProvider lets the same container serve the app in E2E tests
    return make_async_container(*providers, FastapiProvider())
