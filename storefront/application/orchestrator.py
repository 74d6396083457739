"""View orchestrator.

Owns the filter criteria and coordinates the catalog, wishlist and
selection. Every change produces a fresh ViewSnapshot for the
presentation layer.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

import structlog

from storefront.application.debounce import AsyncioScheduler, Debouncer, Scheduler
from storefront.catalog.filters import FilterCriteria, PriceRange, apply_filters
from storefront.catalog.models import Category, Product, StoreConfig
from storefront.catalog.store import CatalogStore
from storefront.domain.commands import (
    ChooseVariant,
    CloseProduct,
    Command,
    OpenProduct,
    SetBrand,
    SetCategory,
    SetPrice,
    SetSearch,
    SetSort,
    ToggleWishlist,
)
from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.selection import Selection, SelectionController
from storefront.domain.state_machines import ViewStatus, validate_view_transition
from storefront.domain.wishlist import WishlistStore
from storefront.infrastructure.catalog_client import CatalogSource
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

Listener = Callable[["ViewSnapshot"], None]


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything the presentation layer needs to render the view.

    Attributes:
        status: Catalog lifecycle status.
        criteria: Criteria the visible list was computed with.
        visible: Visible products in display order.
        wishlist: Favorite product ids.
        selection: Open product and chosen shade.
        categories: Catalog categories.
        brands: Sorted unique brands.
        store: Store config, None until the catalog is loaded.
        error: Load failure message when status is UNAVAILABLE.
    """

    status: ViewStatus
    criteria: FilterCriteria
    visible: tuple[Product, ...] = ()
    wishlist: frozenset[str] = frozenset()
    selection: Selection = field(default_factory=Selection.closed)
    categories: tuple[Category, ...] = ()
    brands: tuple[str, ...] = ()
    store: StoreConfig | None = None
    error: str | None = None

    @property
    def results_count(self) -> int:
        return len(self.visible)

    @property
    def is_empty(self) -> bool:
        """True when a loaded catalog has no products matching the criteria."""
        return self.status == ViewStatus.READY and not self.visible


class ViewOrchestrator:
    """Reactive core of the storefront view.

    Each filter mutator updates one field of the criteria, recomputes
    the visible list from the full catalog and publishes. Search input
    goes through a debouncer; everything else applies immediately.

    Example usage:
        view = ViewOrchestrator(WishlistStore(storage))
        view.subscribe(render)
        await view.load(CatalogClient(url))
        view.dispatch(SetCategory("lipstick"))
        view.dispatch(OpenProduct("p1"))
    """

    def __init__(
        self,
        wishlist: WishlistStore,
        scheduler: Scheduler | None = None,
        search_delay: float | None = None,
    ) -> None:
        """Initialize orchestrator in the loading state.

        Args:
            wishlist: Favorites store.
            scheduler: Timer source for search debouncing; defaults to
                the running asyncio loop.
            search_delay: Search quiescence window in seconds; zero applies
                search input immediately.
        """
        self._wishlist = wishlist
        self._criteria = FilterCriteria()
        self._catalog: CatalogStore | None = None
        self._selection: SelectionController | None = None
        self._visible: tuple[Product, ...] = ()
        self._status = ViewStatus.LOADING
        self._error: str | None = None
        self._listeners: list[Listener] = []

        delay = settings.search_debounce_seconds if search_delay is None else search_delay
        self._search_debouncer = Debouncer(scheduler or AsyncioScheduler(), delay)

        self._handlers: dict[type[Command], Callable[[Any], Any]] = {
            SetCategory: lambda c: self.set_category(c.category_id),
            SetSearch: lambda c: self.set_search(c.text),
            SetBrand: lambda c: self.set_brand(c.brand),
            SetPrice: lambda c: self.set_price(c.token),
            SetSort: lambda c: self.set_sort(c.key),
            ToggleWishlist: lambda c: self.toggle_wishlist(c.product_id),
            OpenProduct: lambda c: self.open_product(c.product_id),
            ChooseVariant: lambda c: self.choose_variant(c.index),
            CloseProduct: lambda c: self.close_product(),
        }

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def status(self) -> ViewStatus:
        return self._status

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def visible(self) -> tuple[Product, ...]:
        return self._visible

    @property
    def catalog(self) -> CatalogStore | None:
        return self._catalog

    @property
    def wishlist(self) -> WishlistStore:
        return self._wishlist

    @property
    def selection(self) -> Selection:
        if self._selection is None:
            return Selection.closed()
        return self._selection.selection

    @property
    def search_pending(self) -> bool:
        return self._search_debouncer.pending

    @property
    def snapshot(self) -> ViewSnapshot:
        catalog = self._catalog
        return ViewSnapshot(
            status=self._status,
            criteria=self._criteria,
            visible=self._visible,
            wishlist=self._wishlist.members,
            selection=self.selection,
            categories=catalog.categories if catalog else (),
            brands=catalog.brands if catalog else (),
            store=catalog.store if catalog else None,
            error=self._error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for published snapshots.

        Args:
            listener: Called with each new snapshot.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Catalog lifecycle
    # ------------------------------------------------------------------

    async def load(self, source: CatalogSource) -> ViewSnapshot:
        """Load the catalog and publish the first view.

        Fetch failures never raise: the view moves to UNAVAILABLE and the
        snapshot carries the error message.

        Args:
            source: Catalog source to fetch from.

        Returns:
            Snapshot after loading.

        Raises:
            InvalidStateTransitionError: If the view already left LOADING;
                checked before anything is fetched.
        """
        validate_view_transition(self._status, ViewStatus.READY)

        try:
            document = await source.fetch()
        except CatalogUnavailableError as e:
            logger.error("Catalog unavailable", source=e.source, reason=e.reason)
            validate_view_transition(self._status, ViewStatus.UNAVAILABLE)
            self._status = ViewStatus.UNAVAILABLE
            self._error = e.message
            self._publish()
            return self.snapshot

        self.attach_catalog(CatalogStore.from_document(document))
        return self.snapshot

    def attach_catalog(self, catalog: CatalogStore) -> None:
        """Install a loaded catalog and publish the initial view.

        Raises:
            InvalidStateTransitionError: If a catalog was already attached
                or loading already failed.
        """
        validate_view_transition(self._status, ViewStatus.READY)
        self._catalog = catalog
        self._selection = SelectionController(catalog)
        self._status = ViewStatus.READY
        logger.info("Catalog ready", products=len(catalog), brands=len(catalog.brands))
        self._refresh()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def set_category(self, category_id: str) -> None:
        self._update_criteria(category=category_id)

    def set_brand(self, brand: str) -> None:
        self._update_criteria(brand=brand)

    def set_price(self, token: str) -> None:
        """Set the price range token.

        Raises:
            InvalidPriceRangeError: If the token is malformed; criteria
                are left unchanged.
        """
        PriceRange.parse(token)
        self._update_criteria(price=token)

    def set_sort(self, key: str) -> None:
        self._update_criteria(sort=key)

    def set_search(self, text: str) -> None:
        """Set search text once input has been quiet for the debounce window.

        A newer call replaces a pending one; the earlier value is dropped.
        """
        value = text.strip()
        if self._search_debouncer.delay <= 0:
            self._apply_search(value)
            return
        self._search_debouncer.schedule(partial(self._apply_search, value))

    def flush_search(self) -> bool:
        """Apply pending search input now.

        Returns:
            True if there was pending input.
        """
        return self._search_debouncer.flush()

    def _apply_search(self, value: str) -> None:
        self._update_criteria(search=value)

    def _update_criteria(self, **changes: str) -> None:
        self._criteria = self._criteria.with_changes(**changes)
        logger.debug("Criteria changed", **changes)
        self._refresh()

    # ------------------------------------------------------------------
    # Wishlist and selection
    # ------------------------------------------------------------------

    def toggle_wishlist(self, product_id: str) -> bool:
        """Toggle a product in the wishlist and publish.

        Returns:
            Membership after the toggle.
        """
        member = self._wishlist.toggle(product_id)
        self._publish()
        return member

    def open_product(self, product_id: str) -> bool:
        if self._selection is None or not self._selection.open(product_id):
            return False
        self._publish()
        return True

    def choose_variant(self, index: int) -> bool:
        if self._selection is None or not self._selection.choose_variant(index):
            return False
        self._publish()
        return True

    def close_product(self) -> None:
        if self._selection is None:
            return
        was_open = self._selection.selection.is_open
        self._selection.close()
        if was_open:
            self._publish()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> Any:
        """Route a command to its handler.

        Args:
            command: Command emitted by the presentation layer.

        Returns:
            Whatever the handler returns (e.g. new wishlist membership).
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"No handler for command {type(command).__name__}")
        return handler(command)

    # ------------------------------------------------------------------
    # Recompute and publish
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        products = self._catalog.products if self._catalog is not None else ()
        self._visible = tuple(apply_filters(products, self._criteria))
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            listener(snapshot)
