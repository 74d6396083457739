"""Tests for card and detail view models."""

from storefront.application.orchestrator import ViewOrchestrator, ViewSnapshot
from storefront.catalog.filters import FilterCriteria
from storefront.catalog.models import Product, StoreConfig
from storefront.domain.state_machines import ViewStatus
from storefront.presentation.views import build_card, build_cards, build_detail
from tests.conftest import make_product

STORE = StoreConfig(whatsapp="573001234567")


class TestProductCard:
    """Tests for grid cards."""

    def test_discounted_card(self, view: ViewOrchestrator) -> None:
        card = build_cards(view.snapshot)[0]
        assert card.product_id == "p1"
        assert card.price_label == "$38.000"
        assert card.original_price_label == "$45.000"
        assert card.discount_percent == 16
        assert card.badge == "sale"
        assert card.badge_label == "Oferta"
        assert card.order_url is not None

    def test_regular_price_card(self, view: ViewOrchestrator) -> None:
        card = build_cards(view.snapshot)[1]
        assert card.product_id == "p2"
        assert card.original_price_label is None
        assert card.discount_percent is None
        assert card.badge is None
        assert card.shade_preview == ()

    def test_out_of_stock_hides_badge_and_order_link(self, view: ViewOrchestrator) -> None:
        card = build_cards(view.snapshot)[2]
        assert card.product_id == "p3"
        assert not card.in_stock
        assert card.badge is None
        assert card.badge_label is None
        assert card.order_url is None

    def test_wished_flag(self, view: ViewOrchestrator) -> None:
        view.toggle_wishlist("p4")
        cards = build_cards(view.snapshot)
        assert [c.product_id for c in cards if c.is_wished] == ["p4"]

    def test_shade_preview_is_capped(self) -> None:
        shades = [{"name": f"Tono {i}", "hex": "#000000"} for i in range(6)]
        product = Product.model_validate(make_product("p9", shades=shades))

        card = build_card(product, STORE, wished=False)

        assert [s.name for s in card.shade_preview] == ["Tono 0", "Tono 1", "Tono 2", "Tono 3"]
        assert card.extra_shades == 2

    def test_cards_follow_visible_order(self, view: ViewOrchestrator) -> None:
        view.set_sort("price-desc")
        assert [c.product_id for c in build_cards(view.snapshot)] == ["p2", "p1", "p4", "p3"]

    def test_no_cards_before_load(self) -> None:
        snapshot = ViewSnapshot(status=ViewStatus.LOADING, criteria=FilterCriteria())
        assert build_cards(snapshot) == []


class TestProductDetail:
    """Tests for the detail panel."""

    def test_closed_has_no_detail(self, view: ViewOrchestrator) -> None:
        assert build_detail(view.snapshot) is None

    def test_detail_with_shades(self, view: ViewOrchestrator) -> None:
        view.open_product("p1")
        view.choose_variant(1)

        detail = build_detail(view.snapshot)

        assert detail is not None
        assert detail.show_shades
        assert [s.selected for s in detail.shades] == [False, True, False]
        assert detail.selected_shade == "Nude Rosado"
        assert "Nude%20Rosado" in detail.order_url

    def test_detail_without_shades(self, view: ViewOrchestrator) -> None:
        """Shadeless products leave the shade section out."""
        view.open_product("p2")

        detail = build_detail(view.snapshot)

        assert detail is not None
        assert not detail.show_shades
        assert detail.shades == ()
        assert detail.selected_shade is None
        assert "Tono" not in detail.order_url

    def test_detail_reflects_wishlist(self, view: ViewOrchestrator) -> None:
        view.open_product("p3")
        view.toggle_wishlist("p3")
        detail = build_detail(view.snapshot)
        assert detail is not None
        assert detail.is_wished
