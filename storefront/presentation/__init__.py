"""Presentation helpers: formatting, view models and outbound links."""

from storefront.presentation.formatting import calc_discount, format_price, results_count_label
from storefront.presentation.views import (
    ProductCard,
    ProductDetail,
    ShadeOption,
    build_cards,
    build_detail,
)
from storefront.presentation.whatsapp import build_whatsapp_link, build_whatsapp_message

__all__ = [
    "ProductCard",
    "ProductDetail",
    "ShadeOption",
    "build_cards",
    "build_detail",
    "build_whatsapp_link",
    "build_whatsapp_message",
    "calc_discount",
    "format_price",
    "results_count_label",
]
