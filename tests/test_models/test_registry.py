"""
Tests for the endpoint registry.
"""

import pytest

from poke_fetch.exceptions import ConfigurationError
from poke_fetch.models import Characteristic, EvolutionChain, Language, NamedResource, Pokemon
from poke_fetch.registry import EndpointRegistry, default_registry, endpoint


class TestEndpointRegistry:
    """Test the EndpointRegistry class."""

    def test_register_and_lookup(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "pokemon")

        assert registry.path_for(Pokemon) == "pokemon"
        assert registry.kind_for("pokemon") is Pokemon
        assert Pokemon in registry
        assert len(registry) == 1

    def test_path_is_stripped(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "/pokemon/")
        assert registry.path_for(Pokemon) == "pokemon"
        assert registry.kind_for("pokemon/") is Pokemon

    def test_missing_kind(self):
        registry = EndpointRegistry()
        with pytest.raises(ConfigurationError, match="Pokemon"):
            registry.path_for(Pokemon)

    def test_missing_path(self):
        registry = EndpointRegistry()
        assert registry.kind_for("pokemon") is None
        assert registry.kind_for(None) is None
        assert registry.kind_for("") is None

    def test_reregister_same_path(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "pokemon")
        registry.register(Pokemon, "pokemon")
        assert len(registry) == 1

    def test_conflicting_path_for_kind(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "pokemon")
        with pytest.raises(ConfigurationError):
            registry.register(Pokemon, "pokemon-form")

    def test_conflicting_kind_for_path(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "pokemon")
        with pytest.raises(ConfigurationError):
            registry.register(Language, "pokemon")

    def test_empty_path(self):
        with pytest.raises(ConfigurationError):
            EndpointRegistry().register(Pokemon, "/")

    def test_items_sorted_by_path(self):
        registry = EndpointRegistry()
        registry.register(Pokemon, "pokemon")
        registry.register(Language, "language")
        assert registry.items() == [(Language, "language"), (Pokemon, "pokemon")]


class TestEndpointDecorator:
    """Test registration through the @endpoint decorator."""

    def test_shipped_kinds_registered(self):
        assert default_registry.path_for(Pokemon) == "pokemon"
        assert default_registry.path_for(EvolutionChain) == "evolution-chain"
        assert default_registry.path_for(Characteristic) == "characteristic"
        assert Pokemon.api_endpoint == "pokemon"

    def test_private_registry(self):
        """Test that new kinds can be added without touching the resolver."""
        registry = EndpointRegistry()

        @endpoint("pokeathlon-stat", registry=registry)
        class PokeathlonStat(NamedResource):
            pass

        assert registry.path_for(PokeathlonStat) == "pokeathlon-stat"
        assert PokeathlonStat.api_endpoint == "pokeathlon-stat"
        assert PokeathlonStat not in default_registry

    def test_empty_private_registries_stay_separate(self):
        """Test that a fresh registry is used even while it is still empty."""
        first, second = EndpointRegistry(), EndpointRegistry()

        @endpoint("pal-park-area", registry=first)
        class PalParkArea(NamedResource):
            pass

        @endpoint("pal-park-area", registry=second)
        class OtherPalParkArea(NamedResource):
            pass

        assert first.kind_for("pal-park-area") is PalParkArea
        assert second.kind_for("pal-park-area") is OtherPalParkArea
        assert default_registry.kind_for("pal-park-area") is None
