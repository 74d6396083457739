"""Filter pipeline for the catalog view.

Pure functions from (products, criteria) to the ordered visible subset.
Nothing here holds state: the same inputs always give the same output.
"""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from storefront.catalog.models import Product
from storefront.domain.exceptions import InvalidPriceRangeError

ALL_CATEGORIES = "all"

_PRICE_TOKEN_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


class SortKey(str, Enum):
    """Sort keys emitted by the sort selector."""

    CATALOG = ""
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"


# key function and reverse flag per sort key; sorted() is stable, ties keep catalog order
_SORTERS: dict[str, tuple[Callable[[Product], Any], bool]] = {
    SortKey.PRICE_ASC.value: (lambda p: p.price, False),
    SortKey.PRICE_DESC.value: (lambda p: p.price, True),
    SortKey.RATING.value: (lambda p: p.rating, True),
}


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds parsed from a price token.

    Attributes:
        minimum: Lower bound (inclusive).
        maximum: Upper bound (inclusive), or None for "minimum and above".
    """

    minimum: int
    maximum: int | None = None

    @classmethod
    def parse(cls, token: str) -> "PriceRange | None":
        """Parse a price token.

        Args:
            token: "" (no constraint), "<min>" or "<min>-<max>".

        Returns:
            PriceRange, or None for the empty token.

        Raises:
            InvalidPriceRangeError: If the token is malformed or min > max.
        """
        if not token:
            return None
        match = _PRICE_TOKEN_RE.match(token)
        if match is None:
            raise InvalidPriceRangeError(token)
        minimum = int(match.group(1))
        maximum = int(match.group(2)) if match.group(2) is not None else None
        if maximum is not None and maximum < minimum:
            raise InvalidPriceRangeError(token)
        return cls(minimum=minimum, maximum=maximum)

    def contains(self, price: float) -> bool:
        if price < self.minimum:
            return False
        return self.maximum is None or price <= self.maximum


@dataclass(frozen=True)
class FilterCriteria:
    """Current combination of filter inputs.

    Attributes:
        category: Category id, or "all".
        search: Free-text search; empty means no text filter.
        brand: Exact brand name; empty means any brand.
        price: Price token; empty means no price constraint.
        sort: Sort key; empty or unknown keeps catalog order.
    """

    category: str = ALL_CATEGORIES
    search: str = ""
    brand: str = ""
    price: str = ""
    sort: str = SortKey.CATALOG.value

    def with_changes(self, **changes: str) -> "FilterCriteria":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_default(self) -> bool:
        return self == FilterCriteria()


def filter_by_category(products: Sequence[Product], category: str) -> list[Product]:
    """Keep products in the given category ("all" or empty keeps everything)."""
    if not category or category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def filter_by_search(products: Sequence[Product], search: str) -> list[Product]:
    """Case-insensitive substring match on name, brand or description."""
    if not search:
        return list(products)
    query = search.lower()
    return [
        p for p in products
        if query in p.name.lower()
        or query in p.brand.lower()
        or query in p.description.lower()
    ]


def filter_by_brand(products: Sequence[Product], brand: str) -> list[Product]:
    """Exact, case-sensitive brand match."""
    if not brand:
        return list(products)
    return [p for p in products if p.brand == brand]


def filter_by_price(products: Sequence[Product], price: str) -> list[Product]:
    """Keep products whose price falls inside the token's range."""
    price_range = PriceRange.parse(price)
    if price_range is None:
        return list(products)
    return [p for p in products if price_range.contains(p.price)]


def sort_products(products: Sequence[Product], sort: str) -> list[Product]:
    """Order products by sort key; unknown keys keep the given order."""
    sorter = _SORTERS.get(sort)
    if sorter is None:
        return list(products)
    key, reverse = sorter
    return sorted(products, key=key, reverse=reverse)


def apply_filters(products: Sequence[Product], criteria: FilterCriteria) -> list[Product]:
    """Apply every active filter, then sort.

    Each step narrows the output of the previous one. Sorting always
    runs last.

    Args:
        products: Full product list in catalog order.
        criteria: Filter criteria to apply.

    Returns:
        New list with the visible products in display order.
    """
    result = filter_by_category(products, criteria.category)
    result = filter_by_search(result, criteria.search)
    result = filter_by_brand(result, criteria.brand)
    result = filter_by_price(result, criteria.price)
    return sort_products(result, criteria.sort)


def extract_brands(products: Iterable[Product]) -> list[str]:
    """Unique brand names, sorted, for the brand selector."""
    return sorted({p.brand for p in products})
