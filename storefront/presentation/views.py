"""View models derived from a ViewSnapshot.

Plain data for templates: product cards for the grid and the detail
panel for the open product.
"""

from dataclasses import dataclass

from storefront.application.orchestrator import ViewSnapshot
from storefront.catalog.models import Product, Shade, StoreConfig
from storefront.presentation.formatting import calc_discount, format_price
from storefront.presentation.whatsapp import build_whatsapp_link

CARD_SHADE_PREVIEW = 4


@dataclass(frozen=True)
class ProductCard:
    """Grid card for one visible product.

    Attributes:
        badge_label: Only set while the product is in stock.
        shade_preview: First shades shown as swatches.
        extra_shades: Shades beyond the preview, shown as "+N".
        order_url: WhatsApp link, None when out of stock.
    """

    product_id: str
    name: str
    brand: str
    image: str
    rating: float
    price_label: str
    original_price_label: str | None
    discount_percent: int | None
    in_stock: bool
    badge: str | None
    badge_label: str | None
    is_wished: bool
    shade_preview: tuple[Shade, ...]
    extra_shades: int
    order_url: str | None


@dataclass(frozen=True)
class ShadeOption:
    index: int
    name: str
    hex: str
    selected: bool


@dataclass(frozen=True)
class ProductDetail:
    """Detail panel for the open product.

    Attributes:
        show_shades: False when the product has no shades; the shade
            section is then left out entirely.
        order_url: WhatsApp link including the selected shade.
    """

    product_id: str
    name: str
    brand: str
    description: str
    image: str
    price_label: str
    original_price_label: str | None
    show_shades: bool
    shades: tuple[ShadeOption, ...]
    selected_shade: str | None
    is_wished: bool
    order_url: str


def build_card(product: Product, store: StoreConfig, wished: bool) -> ProductCard:
    discounted = product.original_price is not None
    return ProductCard(
        product_id=product.id,
        name=product.name,
        brand=product.brand,
        image=product.image,
        rating=product.rating,
        price_label=format_price(product.price),
        original_price_label=format_price(product.original_price) if discounted else None,
        discount_percent=calc_discount(product.original_price, product.price) if discounted else None,
        in_stock=product.stock,
        badge=product.badge if product.stock else None,
        badge_label=product.badge_label if product.stock and product.badge else None,
        is_wished=wished,
        shade_preview=product.shades[:CARD_SHADE_PREVIEW],
        extra_shades=max(len(product.shades) - CARD_SHADE_PREVIEW, 0),
        order_url=build_whatsapp_link(store, product) if product.stock else None,
    )


def build_cards(snapshot: ViewSnapshot) -> list[ProductCard]:
    """Cards for every visible product, in display order."""
    if snapshot.store is None:
        return []
    return [
        build_card(product, snapshot.store, product.id in snapshot.wishlist)
        for product in snapshot.visible
    ]


def build_detail(snapshot: ViewSnapshot) -> ProductDetail | None:
    """Detail panel for the open product, or None when nothing is open."""
    selection = snapshot.selection
    product = selection.product
    if product is None or snapshot.store is None:
        return None

    shades = tuple(
        ShadeOption(index=i, name=s.name, hex=s.hex, selected=i == selection.variant_index)
        for i, s in enumerate(product.shades)
    )
    return ProductDetail(
        product_id=product.id,
        name=product.name,
        brand=product.brand,
        description=product.description,
        image=product.image,
        price_label=format_price(product.price),
        original_price_label=(
            format_price(product.original_price) if product.original_price is not None else None
        ),
        show_shades=product.has_shades,
        shades=shades,
        selected_shade=selection.variant.name if selection.variant else None,
        is_wished=product.id in snapshot.wishlist,
        order_url=build_whatsapp_link(snapshot.store, product, selection.variant),
    )
