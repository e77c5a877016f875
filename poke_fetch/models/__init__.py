"""
Data models and configuration classes for the poke_fetch library.

This package contains the resource entity hierarchy, navigation links and
collection pages, the concrete resource kinds, and the HTTP client
configuration.
"""

# Import all models for easy access
from .base import *
from .http import *
from .resources import *

__all__ = [
    # Base models
    "ApiModel",
    "BaseConfig",
    "LocalizedName",
    "NamedResource",
    "Resource",
    "ResourceLink",
    "ResourcePage",
    "UnnamedResource",
    # HTTP configuration
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "RequestHeaders",
    # Resource kinds
    "Ability",
    "AbilityPokemon",
    "Berry",
    "ChainLink",
    "Characteristic",
    "EvolutionChain",
    "Generation",
    "Language",
    "Move",
    "Nature",
    "Pokemon",
    "PokemonAbilitySlot",
    "PokemonSpecies",
    "PokemonSpeciesVariety",
    "PokemonTypeSlot",
    "Type",
]
