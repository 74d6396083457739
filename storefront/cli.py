"""Command-line storefront view.

Loads a catalog, applies filters and commands, and prints the
resulting product grid and detail panel.

Usage:
    storefront --catalog ./data/products.json --category lipstick --sort price-asc
    storefront --catalog https://shop.example/data/products.json --search mate
    storefront --open p1 --shade 2 --toggle p1
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from storefront.application.orchestrator import ViewOrchestrator, ViewSnapshot
from storefront.catalog.filters import ALL_CATEGORIES, SortKey
from storefront.domain.commands import (
    ChooseVariant,
    Command,
    OpenProduct,
    SetBrand,
    SetCategory,
    SetPrice,
    SetSearch,
    SetSort,
    ToggleWishlist,
)
from storefront.domain.exceptions import InvalidPriceRangeError
from storefront.domain.state_machines import ViewStatus
from storefront.domain.wishlist import WishlistStore
from storefront.infrastructure.catalog_client import catalog_source_for
from storefront.infrastructure.config import settings
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.storage import JsonFileStorage
from storefront.presentation.formatting import results_count_label
from storefront.presentation.views import ProductCard, ProductDetail, build_cards, build_detail


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Browse a storefront catalog from the terminal",
    )
    parser.add_argument(
        "--catalog",
        default=settings.catalog_url,
        help="Catalog document URL or file path (default: %(default)s)",
    )
    parser.add_argument("--category", default=ALL_CATEGORIES, help="Category id or 'all'")
    parser.add_argument("--search", default="", help="Free-text search")
    parser.add_argument("--brand", default="", help="Exact brand name")
    parser.add_argument("--price", default="", help="Price range: '<min>' or '<min>-<max>'")
    parser.add_argument(
        "--sort",
        default=SortKey.CATALOG.value,
        choices=[key.value for key in SortKey],
        help="Sort order (default: catalog order)",
    )
    parser.add_argument(
        "--toggle",
        action="append",
        default=[],
        metavar="PRODUCT_ID",
        help="Toggle a product in the wishlist (repeatable)",
    )
    parser.add_argument("--open", metavar="PRODUCT_ID", help="Open a product's detail panel")
    parser.add_argument("--shade", type=int, metavar="INDEX", help="Shade to choose in the open product")
    parser.add_argument(
        "--wishlist-file",
        type=Path,
        default=settings.wishlist_path,
        help="Durable storage file for the wishlist (default: %(default)s)",
    )
    parser.add_argument("--list-brands", action="store_true", help="Print the brand list and exit")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument("--json-logs", action="store_true", default=settings.log_json)
    return parser


def commands_from_args(args: argparse.Namespace) -> list[Command]:
    """Translate parsed arguments into view commands, in application order."""
    commands: list[Command] = [
        SetCategory(args.category),
        SetSearch(args.search),
        SetBrand(args.brand),
        SetPrice(args.price),
        SetSort(args.sort),
    ]
    commands.extend(ToggleWishlist(product_id) for product_id in args.toggle)
    if args.open:
        commands.append(OpenProduct(args.open))
        if args.shade is not None:
            commands.append(ChooseVariant(args.shade))
    return commands


def format_card(card: ProductCard) -> str:
    parts = [
        f"{'♥' if card.is_wished else ' '} {card.name} [{card.product_id}]",
        card.brand,
        card.price_label,
    ]
    if card.original_price_label:
        parts.append(f"antes {card.original_price_label} (-{card.discount_percent}%)")
    if card.badge_label:
        parts.append(card.badge_label)
    if not card.in_stock:
        parts.append("Agotado")
    if card.shade_preview:
        shades = ", ".join(s.name for s in card.shade_preview)
        if card.extra_shades:
            shades += f" +{card.extra_shades}"
        parts.append(f"tonos: {shades}")
    return " | ".join(parts)


def format_detail(detail: ProductDetail) -> list[str]:
    lines = [
        "",
        f"{detail.brand} - {detail.name}",
        detail.description,
        detail.price_label + (f" (antes {detail.original_price_label})" if detail.original_price_label else ""),
    ]
    if detail.show_shades:
        for option in detail.shades:
            marker = "*" if option.selected else " "
            lines.append(f"  [{marker}] {option.index}: {option.name} {option.hex}")
    lines.append(f"Pedir: {detail.order_url}")
    return lines


def render(snapshot: ViewSnapshot) -> str:
    """Render a snapshot as terminal text."""
    if snapshot.status == ViewStatus.UNAVAILABLE:
        return f"Error al cargar el catálogo: {snapshot.error}"

    lines: list[str] = []
    if snapshot.is_empty:
        lines.append("Sin resultados")
    else:
        lines.append(results_count_label(snapshot.results_count))
        lines.extend(format_card(card) for card in build_cards(snapshot))

    detail = build_detail(snapshot)
    if detail is not None:
        lines.extend(format_detail(detail))
    return "\n".join(lines)


async def run_view(args: argparse.Namespace) -> int:
    """Load the catalog, apply commands and print the view.

    Returns:
        Process exit code.
    """
    wishlist = WishlistStore(JsonFileStorage(args.wishlist_file), key=settings.wishlist_key)
    view = ViewOrchestrator(wishlist, search_delay=0)

    async with catalog_source_for(args.catalog, timeout=settings.catalog_timeout) as source:
        snapshot = await view.load(source)

    if snapshot.status == ViewStatus.UNAVAILABLE:
        print(render(snapshot), file=sys.stderr)
        return 1

    if args.list_brands:
        print("\n".join(snapshot.brands))
        return 0

    try:
        for command in commands_from_args(args):
            view.dispatch(command)
    except InvalidPriceRangeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    print(render(view.snapshot))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs)
    return asyncio.run(run_view(args))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
