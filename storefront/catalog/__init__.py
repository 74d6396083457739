"""Product catalog.

Catalog document models, the read-only catalog store and the
filter pipeline that derives the visible product list.
"""

from storefront.catalog.filters import (
    ALL_CATEGORIES,
    FilterCriteria,
    PriceRange,
    SortKey,
    apply_filters,
    extract_brands,
)
from storefront.catalog.models import CatalogDocument, Category, Product, Shade, StoreConfig
from storefront.catalog.store import CatalogStore

__all__ = [
    # Models
    "CatalogDocument",
    "Category",
    "Product",
    "Shade",
    "StoreConfig",
    # Store
    "CatalogStore",
    # Filters
    "ALL_CATEGORIES",
    "FilterCriteria",
    "PriceRange",
    "SortKey",
    "apply_filters",
    "extract_brands",
]
