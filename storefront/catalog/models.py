"""Pydantic models for the catalog document.

Mirrors the JSON document the storefront is published with:
store config, a flat category list and the products with their shades.
All models are frozen; a loaded catalog is never mutated.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CatalogModel(BaseModel):
    """Base for catalog models: immutable, accepts wire or field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Shade(CatalogModel):
    """A selectable shade (variant) of a product."""

    name: str = Field(..., description="Shade name shown to the buyer")
    hex: str = Field(..., description="Swatch color, e.g. '#B5485D'")


class Category(CatalogModel):
    """Flat catalog category."""

    id: str
    label: str
    emoji: str = ""


class StoreConfig(CatalogModel):
    """Store-level settings carried by the catalog document."""

    whatsapp: str = Field(..., description="Seller phone number in international format")
    currency: str = "COP"


class Product(CatalogModel):
    """Product entity in the catalog.

    Attributes:
        id: Stable unique identifier.
        name: Product name.
        brand: Brand name, matched exactly by the brand filter.
        category: Category id.
        description: Free text, searched by the text filter.
        price: Current price.
        original_price: Price before discount, only present when discounted.
        rating: Average rating.
        stock: Whether the product can be ordered.
        image: Image reference.
        badge: Optional badge tag (e.g. "new", "sale").
        badge_label: Text shown on the badge.
        shades: Ordered shades; the first one is the default selection.
    """

    id: str
    name: str
    brand: str
    category: str
    description: str = ""
    price: float = Field(..., ge=0)
    original_price: float | None = Field(default=None, alias="originalPrice")
    rating: float = 0.0
    stock: bool = True
    image: str = ""
    badge: str | None = None
    badge_label: str | None = Field(default=None, alias="badgeLabel")
    shades: tuple[Shade, ...] = ()

    @model_validator(mode="after")
    def _check_discount(self) -> "Product":
        if self.original_price is not None and self.original_price <= self.price:
            raise ValueError(
                f"originalPrice ({self.original_price}) must be greater than "
                f"price ({self.price}) for product {self.id}"
            )
        return self

    @property
    def is_discounted(self) -> bool:
        """Check if the product carries an original (pre-discount) price."""
        return self.original_price is not None

    @property
    def has_shades(self) -> bool:
        """Check if the product offers any shades."""
        return len(self.shades) > 0


class CatalogDocument(CatalogModel):
    """The full catalog document as published."""

    store: StoreConfig
    categories: tuple[Category, ...] = ()
    products: tuple[Product, ...] = ()

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "CatalogDocument":
        seen: set[str] = set()
        for product in self.products:
            if product.id in seen:
                raise ValueError(f"Duplicate product id '{product.id}'")
            seen.add(product.id)
        return self
