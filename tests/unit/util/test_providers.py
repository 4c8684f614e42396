"""Unit tests for provider selection."""

import pytest

from kopiena.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    get_provider,
    mockable_components,
)
from tests.di import MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider

    def test_persistence_is_mockable(self):
        assert mockable_components() == {"persistence"}


class TestBuildTestContainer:
    """Tests for the test container builder."""

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})
