"""WhatsApp order links.

Builds the pre-filled chat link a buyer follows to ask the seller
about a product and, optionally, a shade.
"""

import re
from urllib.parse import quote

from storefront.catalog.models import Product, Shade, StoreConfig
from storefront.infrastructure.config import settings
from storefront.presentation.formatting import format_price


def build_whatsapp_message(product: Product, shade: Shade | None = None) -> str:
    """Compose the order message for a product.

    Args:
        product: Product the buyer is asking about.
        shade: Chosen shade, if any.

    Returns:
        Message text.
    """
    shade_part = f" - Tono: {shade.name}" if shade else ""
    price = format_price(product.price)
    return (
        f"Hola! 👋 Me interesa: *{product.name}* de *{product.brand}*"
        f"{shade_part} ({price}). ¿Está disponible?"
    )


def build_whatsapp_link(
    store: StoreConfig,
    product: Product,
    shade: Shade | None = None,
    base_url: str | None = None,
) -> str:
    """Build the wa.me deep link with the message pre-filled.

    Args:
        store: Store config holding the seller number.
        product: Product the buyer is asking about.
        shade: Chosen shade, if any.
        base_url: Link base; defaults to the configured one.

    Returns:
        Full link URL.
    """
    number = re.sub(r"\D", "", store.whatsapp)
    text = quote(build_whatsapp_message(product, shade), safe="!~*'()")
    base = (base_url or settings.whatsapp_base_url).rstrip("/")
    return f"{base}/{number}?text={text}"
