"""Read-only catalog store.

Holds the products, categories and store config of one catalog load,
with lookup by product id.
"""

from collections.abc import Iterator

from storefront.catalog.filters import extract_brands
from storefront.catalog.models import CatalogDocument, Category, Product, StoreConfig


class CatalogStore:
    """Immutable-per-load product collection.

    Created once from a validated document and never mutated, so it can
    be shared freely between the filter pipeline and the selection
    controller.

    Example usage:
        catalog = CatalogStore.from_document(document)
        product = catalog.get("p1")
        brands = catalog.brands
    """

    def __init__(
        self,
        store: StoreConfig,
        categories: tuple[Category, ...],
        products: tuple[Product, ...],
    ) -> None:
        """Initialize catalog store.

        Args:
            store: Store config from the document.
            categories: Categories in document order.
            products: Products in catalog order.
        """
        self._store = store
        self._categories = tuple(categories)
        self._products = tuple(products)
        self._by_id = {product.id: product for product in self._products}
        self._brands = tuple(extract_brands(self._products))

    @classmethod
    def from_document(cls, document: CatalogDocument) -> "CatalogStore":
        """Build a store from a catalog document.

        Args:
            document: Validated catalog document.

        Returns:
            CatalogStore instance.
        """
        return cls(
            store=document.store,
            categories=document.categories,
            products=document.products,
        )

    @property
    def store(self) -> StoreConfig:
        return self._store

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def products(self) -> tuple[Product, ...]:
        """All products in catalog (insertion) order."""
        return self._products

    @property
    def brands(self) -> tuple[str, ...]:
        """Unique brand names, sorted."""
        return self._brands

    def get(self, product_id: str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        return self._by_id.get(product_id)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __repr__(self) -> str:
        return f"<CatalogStore(products={len(self._products)}, categories={len(self._categories)})>"
