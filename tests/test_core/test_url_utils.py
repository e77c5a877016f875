"""
Tests for the URL utilities module.
"""

import pytest

from poke_fetch.utils.url import (
    build_paged_url,
    extract_id_or_name_segment,
    extract_kind_segment,
    extract_offset,
    extract_trailing_id,
    normalize_resource_name,
)


class TestExtractOffset:
    """Test extraction of the offset query parameter."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://pokeapi.co/api/v2/pokemon/?offset=20&limit=20", "20"),
            ("https://pokeapi.co/api/v2/pokemon/?limit=20&offset=40", "40"),
            ("https://pokeapi.co/api/v2/pokemon/?offset=60#top", "60"),
            ("https://pokeapi.co/api/v2/pokemon/?limit=5&offset=0&x=1", "0"),
        ],
    )
    def test_offset_present(self, url, expected):
        assert extract_offset(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "https://pokeapi.co/api/v2/pokemon/",
            "https://pokeapi.co/api/v2/pokemon/?limit=20",
        ],
    )
    def test_offset_absent(self, url):
        assert extract_offset(url) is None


class TestPathSegments:
    """Test extraction of kind and id-or-name segments."""

    def test_item_url(self):
        url = "https://pokeapi.co/api/v2/pokemon/25/"
        assert extract_kind_segment(url) == "pokemon"
        assert extract_id_or_name_segment(url) == "25"

    def test_item_url_with_suffix(self):
        url = "https://pokeapi.co/api/v2/pokemon/25/encounters"
        assert extract_kind_segment(url) == "pokemon"
        assert extract_id_or_name_segment(url) == "25"

    def test_named_item(self):
        url = "https://pokeapi.co/api/v2/pokemon-species/mr-mime/"
        assert extract_kind_segment(url) == "pokemon-species"
        assert extract_id_or_name_segment(url) == "mr-mime"

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "https://pokeapi.co/api/v2/pokemon/",
            "https://example.com/pokemon/25/",
        ],
    )
    def test_other_shapes(self, url):
        assert extract_kind_segment(url) is None
        assert extract_id_or_name_segment(url) is None


class TestExtractTrailingId:
    """Test parsing of the trailing numeric id."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://pokeapi.co/api/v2/pokemon/25/", 25),
            ("https://pokeapi.co/api/v2/pokemon/25", 25),
            ("https://pokeapi.co/api/v2/pokemon/0/", 0),
            ("https://pokeapi.co/api/v2/evolution-chain/10///", 10),
        ],
    )
    def test_numeric(self, url, expected):
        assert extract_trailing_id(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "https://pokeapi.co/api/v2/pokemon/pikachu/",
            "https://pokeapi.co/api/v2/pokemon/-1/",
            "https://pokeapi.co/api/v2/pokemon/1.5/",
        ],
    )
    def test_not_numeric(self, url):
        assert extract_trailing_id(url) is None


class TestBuildPagedUrl:
    """Test construction of paginated URLs."""

    def test_no_parameters(self):
        assert build_paged_url("pokemon/") == "pokemon/"
        assert build_paged_url("pokemon/", None, None) == "pokemon/"

    def test_limit_before_offset(self):
        url = build_paged_url("pokemon/", 20, 5)
        assert url == "pokemon/?limit=20&offset=5"
        assert url.index("limit=20") < url.index("offset=5")

    def test_single_parameter(self):
        assert build_paged_url("pokemon/", limit=10) == "pokemon/?limit=10"
        assert build_paged_url("pokemon/", offset=0) == "pokemon/?offset=0"

    def test_existing_query(self):
        assert build_paged_url("pokemon/?lang=en", 5) == "pokemon/?lang=en&limit=5"

    def test_offset_round_trip(self):
        assert extract_offset(build_paged_url("https://pokeapi.co/api/v2/berry/", 20, 40)) == "40"


class TestNormalizeResourceName:
    """Test normalization of display names to API slugs."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Mr. Mime", "mr-mime"),
            ("Farfetch'd", "farfetchd"),
            ("PIKACHU", "pikachu"),
            ("Tapu Koko", "tapu-koko"),
            ("", ""),
        ],
    )
    def test_normalize(self, name, expected):
        assert normalize_resource_name(name) == expected

    @pytest.mark.parametrize("name", ["Mr. Mime", "Farfetch'd", "Mime Jr.", "ho-oh"])
    def test_idempotent(self, name):
        once = normalize_resource_name(name)
        assert normalize_resource_name(once) == once
