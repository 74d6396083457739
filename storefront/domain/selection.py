"""Product detail selection.

Tracks which product is open in the detail view and which of its
shades is chosen. At most one of each at any time.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from storefront.catalog.models import Product, Shade
from storefront.domain.state_machines import SelectionStatus

if TYPE_CHECKING:
    from storefront.catalog.store import CatalogStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class Selection:
    """Currently open product and chosen shade.

    Only built through the factory methods, which keep the invariants:
    no product means no shade, and a shade always belongs to the
    product's shade list.

    Attributes:
        product: Open product, or None when closed.
        variant: Chosen shade, or None.
        variant_index: Position of the chosen shade in product.shades.
    """

    product: Product | None = None
    variant: Shade | None = None
    variant_index: int | None = None

    @classmethod
    def closed(cls) -> "Selection":
        return cls()

    @classmethod
    def opened(cls, product: Product, variant_index: int = 0) -> "Selection":
        """Open a product on one of its shades.

        Args:
            product: Product to open.
            variant_index: Shade position; ignored when the product has no shades.

        Returns:
            Open selection.
        """
        if not product.shades:
            return cls(product=product)
        return cls(
            product=product,
            variant=product.shades[variant_index],
            variant_index=variant_index,
        )

    @property
    def status(self) -> SelectionStatus:
        return SelectionStatus.CLOSED if self.product is None else SelectionStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.product is not None

    @property
    def product_id(self) -> str | None:
        return self.product.id if self.product is not None else None


class SelectionController:
    """State machine for the product detail view.

    Lookup misses (unknown product id, shade index out of range) are
    silent no-ops: they can only come from stale UI state.

    Example usage:
        controller = SelectionController(catalog)
        controller.open("p1")          # first shade preselected
        controller.choose_variant(2)
        controller.close()
    """

    def __init__(self, catalog: "CatalogStore") -> None:
        """Initialize controller in the closed state.

        Args:
            catalog: Catalog used to resolve product ids.
        """
        self._catalog = catalog
        self._selection = Selection.closed()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def status(self) -> SelectionStatus:
        return self._selection.status

    def open(self, product_id: str) -> bool:
        """Open a product with its default (first) shade.

        Args:
            product_id: Product to open.

        Returns:
            True if the product was found and opened.
        """
        product = self._catalog.get(product_id)
        if product is None:
            logger.debug("Ignoring open for unknown product", product_id=product_id)
            return False

        self._selection = Selection.opened(product)
        logger.debug(
            "Product opened",
            product_id=product_id,
            shade=self._selection.variant.name if self._selection.variant else None,
        )
        return True

    def choose_variant(self, index: int) -> bool:
        """Choose a shade of the open product.

        Args:
            index: Position in the open product's shade list.

        Returns:
            True if the shade changed.
        """
        product = self._selection.product
        if product is None or not self.status.accepts_variant_choice():
            return False

        if not 0 <= index < len(product.shades):
            logger.debug(
                "Ignoring out of range shade",
                product_id=product.id,
                index=index,
                shade_count=len(product.shades),
            )
            return False

        self._selection = Selection.opened(product, variant_index=index)
        return True

    def close(self) -> None:
        """Close the detail view. Safe to call when already closed."""
        self._selection = Selection.closed()
