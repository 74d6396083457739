"""Tests for the catalog filter pipeline."""

from itertools import permutations

import pytest

from storefront.catalog.filters import (
    ALL_CATEGORIES,
    FilterCriteria,
    PriceRange,
    apply_filters,
    extract_brands,
    filter_by_brand,
    filter_by_category,
    filter_by_price,
    filter_by_search,
)
from storefront.catalog.models import CatalogDocument, Product
from storefront.catalog.store import CatalogStore
from storefront.domain.exceptions import InvalidPriceRangeError
from tests.conftest import ids, make_product


def products_from(*raw: dict) -> list[Product]:
    document = CatalogDocument.model_validate({"store": {"whatsapp": "1"}, "products": list(raw)})
    return list(document.products)


class TestPriceRange:
    """Tests for price token parsing."""

    def test_empty_token_means_no_constraint(self) -> None:
        """Empty token parses to None."""
        assert PriceRange.parse("") is None

    def test_bounded_range(self) -> None:
        """'min-max' parses both bounds."""
        assert PriceRange.parse("0-50000") == PriceRange(minimum=0, maximum=50000)

    def test_open_ended_range(self) -> None:
        """Bare 'min' has no upper bound."""
        assert PriceRange.parse("200000") == PriceRange(minimum=200000, maximum=None)

    def test_bounds_are_inclusive(self) -> None:
        """Both bounds are inclusive."""
        price_range = PriceRange(minimum=100, maximum=200)
        assert price_range.contains(100)
        assert price_range.contains(200)
        assert not price_range.contains(99)
        assert not price_range.contains(201)

    def test_open_ended_contains_everything_above(self) -> None:
        """Open-ended range accepts any price at or above the minimum."""
        price_range = PriceRange(minimum=100)
        assert price_range.contains(100)
        assert price_range.contains(10_000_000)
        assert not price_range.contains(99.5)

    @pytest.mark.parametrize("token", ["abc", "10-", "-5", "10-abc", "1.5-3", " 10", "10-5"])
    def test_malformed_tokens_raise(self, token: str) -> None:
        """Malformed tokens and inverted bounds are rejected."""
        with pytest.raises(InvalidPriceRangeError) as exc_info:
            PriceRange.parse(token)
        assert exc_info.value.token == token


class TestFilterCriteria:
    """Tests for the FilterCriteria value."""

    def test_defaults(self) -> None:
        """Defaults mean no filtering and catalog order."""
        criteria = FilterCriteria()
        assert criteria.category == ALL_CATEGORIES
        assert criteria.search == ""
        assert criteria.brand == ""
        assert criteria.price == ""
        assert criteria.sort == ""
        assert criteria.is_default

    def test_with_changes_returns_new_value(self) -> None:
        """with_changes leaves the original untouched."""
        criteria = FilterCriteria()
        changed = criteria.with_changes(brand="Vogue")
        assert changed.brand == "Vogue"
        assert criteria.brand == ""
        assert not changed.is_default


class TestApplyFilters:
    """Tests for apply_filters over the shared catalog fixture."""

    def test_default_criteria_keeps_catalog_order(self, catalog: CatalogStore) -> None:
        """No active filters returns everything in catalog order."""
        assert ids(apply_filters(catalog.products, FilterCriteria())) == ["p1", "p2", "p3", "p4"]

    def test_idempotent(self, catalog: CatalogStore) -> None:
        """Same criteria twice gives identical ordered output."""
        criteria = FilterCriteria(category="skincare", sort="price-desc")
        first = apply_filters(catalog.products, criteria)
        second = apply_filters(catalog.products, criteria)
        assert first == second

    def test_does_not_mutate_input(self, catalog: CatalogStore) -> None:
        """Input sequence is never reordered."""
        products = list(catalog.products)
        apply_filters(products, FilterCriteria(sort="price-asc"))
        assert ids(products) == ["p1", "p2", "p3", "p4"]

    def test_category(self, catalog: CatalogStore) -> None:
        """Only products of the chosen category remain."""
        result = apply_filters(catalog.products, FilterCriteria(category="lipstick"))
        assert ids(result) == ["p1", "p3"]
        assert all(p.category == "lipstick" for p in result)

    def test_empty_category_means_all(self, catalog: CatalogStore) -> None:
        """An empty category id does not filter."""
        assert len(apply_filters(catalog.products, FilterCriteria(category=""))) == 4

    def test_unknown_category_is_empty(self, catalog: CatalogStore) -> None:
        """A category with no products yields nothing."""
        assert apply_filters(catalog.products, FilterCriteria(category="nails")) == []

    def test_search_is_case_insensitive(self, catalog: CatalogStore) -> None:
        """Search lower-cases both sides."""
        assert ids(apply_filters(catalog.products, FilterCriteria(search="LABIAL"))) == ["p1"]

    def test_search_matches_brand(self, catalog: CatalogStore) -> None:
        """Brand text is searched."""
        assert ids(apply_filters(catalog.products, FilterCriteria(search="derma"))) == ["p2", "p4"]

    def test_search_matches_name_or_description(self, catalog: CatalogStore) -> None:
        """A hit in either the name or the description is enough."""
        result = apply_filters(catalog.products, FilterCriteria(search="brillo"))
        assert ids(result) == ["p3", "p4"]

    def test_brand_is_exact(self, catalog: CatalogStore) -> None:
        """Brand filter is an exact, case-sensitive match."""
        assert ids(apply_filters(catalog.products, FilterCriteria(brand="Dermanat"))) == ["p2", "p4"]
        assert apply_filters(catalog.products, FilterCriteria(brand="dermanat")) == []
        assert apply_filters(catalog.products, FilterCriteria(brand="Derma")) == []

    def test_bounded_price(self, catalog: CatalogStore) -> None:
        """'min-max' keeps prices inside the inclusive range."""
        result = apply_filters(catalog.products, FilterCriteria(price="0-38000"))
        assert ids(result) == ["p1", "p3", "p4"]
        assert all(0 <= p.price <= 38000 for p in result)

    def test_open_ended_price(self, catalog: CatalogStore) -> None:
        """Bare 'min' keeps prices at or above it."""
        result = apply_filters(catalog.products, FilterCriteria(price="38000"))
        assert ids(result) == ["p1", "p2", "p4"]
        assert all(p.price >= 38000 for p in result)

    def test_sort_price_ascending_is_stable(self, catalog: CatalogStore) -> None:
        """Equal prices keep catalog order."""
        result = apply_filters(catalog.products, FilterCriteria(sort="price-asc"))
        assert ids(result) == ["p3", "p1", "p4", "p2"]
        prices = [p.price for p in result]
        assert prices == sorted(prices)

    def test_sort_price_descending_is_stable(self, catalog: CatalogStore) -> None:
        """Descending price keeps catalog order among ties."""
        result = apply_filters(catalog.products, FilterCriteria(sort="price-desc"))
        assert ids(result) == ["p2", "p1", "p4", "p3"]

    def test_sort_rating_descending(self, catalog: CatalogStore) -> None:
        """Rating sort is highest first, ties in catalog order."""
        result = apply_filters(catalog.products, FilterCriteria(sort="rating"))
        assert ids(result) == ["p2", "p1", "p4", "p3"]
        ratings = [p.rating for p in result]
        assert ratings == sorted(ratings, reverse=True)

    def test_unknown_sort_keeps_catalog_order(self, catalog: CatalogStore) -> None:
        """Unrecognized keys leave the order alone."""
        result = apply_filters(catalog.products, FilterCriteria(sort="name"))
        assert ids(result) == ["p1", "p2", "p3", "p4"]

    def test_filters_compose_then_sort(self, catalog: CatalogStore) -> None:
        """All filters narrow together and sorting applies last."""
        criteria = FilterCriteria(category="skincare", brand="Dermanat", price="0-100000", sort="price-asc")
        assert ids(apply_filters(catalog.products, criteria)) == ["p4", "p2"]

    def test_predicate_filters_commute(self, catalog: CatalogStore) -> None:
        """Category, search, brand and price give the same set in any order."""
        steps = [
            lambda ps: filter_by_category(ps, "lipstick"),
            lambda ps: filter_by_search(ps, "a"),
            lambda ps: filter_by_brand(ps, "Vogue"),
            lambda ps: filter_by_price(ps, "30000-40000"),
        ]
        results = set()
        for order in permutations(steps):
            products = list(catalog.products)
            for step in order:
                products = step(products)
            results.add(tuple(ids(products)))
        assert results == {("p1",)}


class TestScenarios:
    """End-to-end filter scenarios."""

    def test_all_category_returns_everything_in_order(self) -> None:
        """Three lipsticks with category 'all' come back unchanged."""
        products = products_from(
            make_product("a", category="lipstick"),
            make_product("b", category="lipstick"),
            make_product("c", category="lipstick"),
        )
        assert ids(apply_filters(products, FilterCriteria(category="all"))) == ["a", "b", "c"]

    def test_price_range_then_sort(self) -> None:
        """Price range keeps the first two; ascending sort keeps them ordered."""
        products = products_from(
            make_product("cheap", price=10000),
            make_product("mid", price=50000),
            make_product("dear", price=90000),
        )
        ranged = apply_filters(products, FilterCriteria(price="0-50000"))
        assert ids(ranged) == ["cheap", "mid"]

        sorted_result = apply_filters(products, FilterCriteria(price="0-50000", sort="price-asc"))
        assert [p.price for p in sorted_result] == [10000, 50000]


class TestExtractBrands:
    """Tests for brand extraction."""

    def test_unique_and_sorted(self, catalog: CatalogStore) -> None:
        """Brands are deduplicated and sorted."""
        assert extract_brands(catalog.products) == ["Dermanat", "Samy", "Vogue"]

    def test_empty(self) -> None:
        """No products means no brands."""
        assert extract_brands([]) == []
