"""
Concrete resource kinds served by the catalog API.

Each kind registers its endpoint path with :func:`poke_fetch.registry.endpoint`
next to its definition. Only the commonly used fields are modelled; nested
references are typed :class:`ResourceLink` values that can be handed straight
to :meth:`ResourceResolver.resolve`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..registry import endpoint
from .base import ApiModel, NamedResource, ResourceLink, UnnamedResource


@endpoint("language")
class Language(NamedResource):
    """A language used for translations of resource names."""

    official: bool = False
    iso639: str = ""
    iso3166: str = ""


@endpoint("generation")
class Generation(NamedResource):
    """A grouping of games by the set of Pokémon they introduced."""

    abilities: List[ResourceLink[Ability]] = Field(default_factory=list)
    moves: List[ResourceLink[Move]] = Field(default_factory=list)
    pokemon_species: List[ResourceLink[PokemonSpecies]] = Field(default_factory=list)
    types: List[ResourceLink[Type]] = Field(default_factory=list)


class TypePokemon(ApiModel):
    slot: int
    pokemon: ResourceLink[Pokemon]


@endpoint("type")
class Type(NamedResource):
    """An elemental type of moves and Pokémon."""

    generation: Optional[ResourceLink[Generation]] = None
    pokemon: List[TypePokemon] = Field(default_factory=list)
    moves: List[ResourceLink[Move]] = Field(default_factory=list)


class AbilityPokemon(ApiModel):
    is_hidden: bool = False
    slot: int
    pokemon: ResourceLink[Pokemon]


@endpoint("ability")
class Ability(NamedResource):
    """A passive effect a Pokémon can have."""

    is_main_series: bool = True
    generation: Optional[ResourceLink[Generation]] = None
    pokemon: List[AbilityPokemon] = Field(default_factory=list)


@endpoint("move")
class Move(NamedResource):
    """A skill used in battle."""

    accuracy: Optional[int] = None
    power: Optional[int] = None
    pp: Optional[int] = None
    priority: int = 0
    type: Optional[ResourceLink[Type]] = None
    generation: Optional[ResourceLink[Generation]] = None


@endpoint("nature")
class Nature(NamedResource):
    """Influences how a Pokémon's stats grow; stats and flavors are left as plain links."""

    decreased_stat: Optional[ResourceLink] = None
    increased_stat: Optional[ResourceLink] = None
    hates_flavor: Optional[ResourceLink] = None
    likes_flavor: Optional[ResourceLink] = None


@endpoint("berry")
class Berry(NamedResource):
    growth_time: int = 0
    max_harvest: int = 0
    natural_gift_power: int = 0
    size: int = 0
    smoothness: int = 0
    soil_dryness: int = 0
    firmness: Optional[ResourceLink] = None
    item: Optional[ResourceLink] = None
    natural_gift_type: Optional[ResourceLink[Type]] = None


class PokemonSpeciesVariety(ApiModel):
    is_default: bool = False
    pokemon: ResourceLink[Pokemon]


@endpoint("pokemon-species")
class PokemonSpecies(NamedResource):
    """The species a family of Pokémon forms belongs to."""

    order: int = 0
    gender_rate: int = -1
    capture_rate: int = 0
    base_happiness: Optional[int] = None
    is_baby: bool = False
    is_legendary: bool = False
    is_mythical: bool = False
    generation: Optional[ResourceLink[Generation]] = None
    evolution_chain: Optional[ResourceLink[EvolutionChain]] = None
    varieties: List[PokemonSpeciesVariety] = Field(default_factory=list)


class PokemonTypeSlot(ApiModel):
    slot: int
    type: ResourceLink[Type]


class PokemonAbilitySlot(ApiModel):
    is_hidden: bool = False
    slot: int
    ability: ResourceLink[Ability]


@endpoint("pokemon")
class Pokemon(NamedResource):
    """A single Pokémon form with its battle-relevant data."""

    base_experience: Optional[int] = None
    height: int = 0
    weight: int = 0
    order: int = 0
    is_default: bool = True
    location_area_encounters: Optional[str] = None
    species: Optional[ResourceLink[PokemonSpecies]] = None
    types: List[PokemonTypeSlot] = Field(default_factory=list)
    abilities: List[PokemonAbilitySlot] = Field(default_factory=list)


class ChainLink(ApiModel):
    """One node of an evolution chain."""

    is_baby: bool = False
    species: ResourceLink[PokemonSpecies]
    evolves_to: List[ChainLink] = Field(default_factory=list)


@endpoint("evolution-chain")
class EvolutionChain(UnnamedResource):
    """The evolution family of a species, as a tree of chain links."""

    baby_trigger_item: Optional[ResourceLink] = None
    chain: ChainLink

    def species_links(self) -> List[ResourceLink[PokemonSpecies]]:
        """Species links of every node, depth first."""
        links: List[ResourceLink[PokemonSpecies]] = []
        stack = [self.chain]
        while stack:
            node = stack.pop()
            links.append(node.species)
            stack.extend(reversed(node.evolves_to))
        return links


@endpoint("characteristic")
class Characteristic(UnnamedResource):
    gene_modulo: int = 0
    possible_values: List[int] = Field(default_factory=list)
    highest_stat: Optional[ResourceLink] = None


for _model in (
    Language,
    Generation,
    TypePokemon,
    Type,
    AbilityPokemon,
    Ability,
    Move,
    Nature,
    Berry,
    PokemonSpeciesVariety,
    PokemonSpecies,
    PokemonTypeSlot,
    PokemonAbilitySlot,
    Pokemon,
    ChainLink,
    EvolutionChain,
    Characteristic,
):
    _model.model_rebuild()
del _model


__all__ = [
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
