"""Shared fixtures for storefront tests."""

import json
from collections.abc import Callable
from typing import Any

import pytest

from storefront.application.orchestrator import ViewOrchestrator, ViewSnapshot
from storefront.catalog.models import CatalogDocument
from storefront.catalog.store import CatalogStore
from storefront.domain.wishlist import WishlistStore
from storefront.infrastructure.storage import InMemoryStorage, StorageError


# ============================================================================
# Fakes
# ============================================================================


class ManualTimer:
    """Timer handle returned by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test advances it."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [t for t in self.timers if not t.cancelled and t.due <= self.now + 1e-9]
        self.timers = [t for t in self.timers if t not in due]
        for timer in sorted(due, key=lambda t: t.due):
            timer.callback()

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]


class RecordingStorage(InMemoryStorage):
    """In-memory storage that records every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


class FailingStorage:
    """Storage whose writes (and optionally reads) always fail."""

    def __init__(self, fail_reads: bool = False) -> None:
        self.fail_reads = fail_reads
        self.attempts = 0

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError(key, "storage unavailable")
        return None

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        raise StorageError(key, "quota exceeded")


# ============================================================================
# Catalog Data
# ============================================================================


def make_product(
    product_id: str,
    *,
    name: str | None = None,
    brand: str = "Vogue",
    category: str = "lipstick",
    description: str = "",
    price: float = 10000,
    original_price: float | None = None,
    rating: float = 4.0,
    stock: bool = True,
    badge: str | None = None,
    badge_label: str | None = None,
    shades: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Build a raw product entry in catalog document (wire) form."""
    data: dict[str, Any] = {
        "id": product_id,
        "name": name or f"Product {product_id}",
        "brand": brand,
        "category": category,
        "description": description,
        "price": price,
        "rating": rating,
        "stock": stock,
        "image": f"./img/{product_id}.webp",
        "shades": shades or [],
    }
    if original_price is not None:
        data["originalPrice"] = original_price
    if badge is not None:
        data["badge"] = badge
        data["badgeLabel"] = badge_label or badge.title()
    return data


SHADES = [
    {"name": "Rojo Pasión", "hex": "#B3122E"},
    {"name": "Nude Rosado", "hex": "#C98A84"},
    {"name": "Vino", "hex": "#6B1E2C"},
]


@pytest.fixture
def catalog_data() -> dict[str, Any]:
    """Raw catalog document with mixed categories, brands and prices."""
    return {
        "store": {"whatsapp": "+57 300 123 4567", "currency": "COP"},
        "categories": [
            {"id": "all", "label": "Todo", "emoji": "✨"},
            {"id": "lipstick", "label": "Labiales", "emoji": "💄"},
            {"id": "skincare", "label": "Skincare", "emoji": "🧴"},
        ],
        "products": [
            make_product(
                "p1",
                name="Labial Mate Velvet",
                brand="Vogue",
                category="lipstick",
                description="Labial mate de larga duración",
                price=38000,
                original_price=45000,
                rating=4.7,
                badge="sale",
                badge_label="Oferta",
                shades=SHADES,
            ),
            make_product(
                "p2",
                name="Sérum Vitamina C",
                brand="Dermanat",
                category="skincare",
                description="Sérum iluminador",
                price=92000,
                rating=4.9,
            ),
            make_product(
                "p3",
                name="Brillo Gloss",
                brand="Samy",
                category="lipstick",
                description="Gloss hidratante efecto espejo",
                price=18500,
                rating=4.5,
                stock=False,
                badge="new",
                shades=SHADES[:1],
            ),
            make_product(
                "p4",
                name="Protector Solar",
                brand="Dermanat",
                category="skincare",
                description="Textura ligera, sin brillo",
                price=38000,
                rating=4.7,
            ),
        ],
    }


@pytest.fixture
def catalog_document(catalog_data: dict[str, Any]) -> CatalogDocument:
    return CatalogDocument.model_validate(catalog_data)


@pytest.fixture
def catalog(catalog_document: CatalogDocument) -> CatalogStore:
    return CatalogStore.from_document(catalog_document)


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def wishlist(storage: RecordingStorage) -> WishlistStore:
    return WishlistStore(storage)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def published() -> list[ViewSnapshot]:
    return []


@pytest.fixture
def view(
    wishlist: WishlistStore,
    scheduler: ManualScheduler,
    catalog: CatalogStore,
    published: list[ViewSnapshot],
) -> ViewOrchestrator:
    """Orchestrator with a loaded catalog and a manual search clock."""
    orchestrator = ViewOrchestrator(wishlist, scheduler=scheduler, search_delay=0.3)
    orchestrator.subscribe(published.append)
    orchestrator.attach_catalog(catalog)
    published.clear()
    return orchestrator


def ids(products: Any) -> list[str]:
    """Product ids in order."""
    return [p.id for p in products]


def dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False)
