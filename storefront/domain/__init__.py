"""Domain layer - selection, wishlist, commands, state machines.

This module exports the storefront's stateful building blocks:

- **State Machines**: SelectionStatus, ViewStatus
- **Selection**: the open product and chosen shade
- **Wishlist**: persisted favorites set
- **Commands**: typed user interactions consumed by the view orchestrator
- **Exceptions**: domain-specific errors

Example usage:
    from storefront.domain import SelectionController, WishlistStore

    controller = SelectionController(catalog)
    controller.open("p1")
    controller.choose_variant(1)

    wishlist = WishlistStore(InMemoryStorage())
    wishlist.toggle("p1")
"""

from storefront.domain.commands import (
    COMMAND_REGISTRY,
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
    command_from_dict,
)
from storefront.domain.exceptions import (
    CatalogUnavailableError,
    DomainError,
    InvalidCommandError,
    InvalidPriceRangeError,
    InvalidStateTransitionError,
    UnknownCommandError,
)
from storefront.domain.selection import Selection, SelectionController
from storefront.domain.state_machines import (
    SelectionStatus,
    ViewStatus,
    validate_view_transition,
)
from storefront.domain.wishlist import WishlistStore

__all__ = [
    # Commands
    "COMMAND_REGISTRY",
    "ChooseVariant",
    "CloseProduct",
    "Command",
    "OpenProduct",
    "SetBrand",
    "SetCategory",
    "SetPrice",
    "SetSearch",
    "SetSort",
    "ToggleWishlist",
    "command_from_dict",
    # Exceptions
    "CatalogUnavailableError",
    "DomainError",
    "InvalidCommandError",
    "InvalidPriceRangeError",
    "InvalidStateTransitionError",
    "UnknownCommandError",
    # Selection
    "Selection",
    "SelectionController",
    # State machines
    "SelectionStatus",
    "ViewStatus",
    "validate_view_transition",
    # Wishlist
    "WishlistStore",
]
