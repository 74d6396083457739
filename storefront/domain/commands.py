"""Commands emitted by the presentation layer.

Every user interaction reaches the view orchestrator as one of these
immutable commands instead of a callback closing over shared state.
"""

from dataclasses import MISSING, dataclass, fields
from typing import Any, ClassVar

from storefront.domain.exceptions import InvalidCommandError, UnknownCommandError


@dataclass(frozen=True)
class Command:
    """Base class for view commands.

    Attributes:
        command_type: String identifier for the command type (set by subclass).
    """

    command_type: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert command to its raw event form."""
        data: dict[str, Any] = {"type": self.command_type}
        for f in fields(self):
            data[f.name] = getattr(self, f.name)
        return data


# ============================================================================
# Filter Commands
# ============================================================================


@dataclass(frozen=True)
class SetCategory(Command):
    """Select a category pill ("all" clears the category filter)."""

    command_type: ClassVar[str] = "set_category"

    category_id: str


@dataclass(frozen=True)
class SetSearch(Command):
    """Search box input; applied after the debounce window."""

    command_type: ClassVar[str] = "set_search"

    text: str


@dataclass(frozen=True)
class SetBrand(Command):
    command_type: ClassVar[str] = "set_brand"

    brand: str


@dataclass(frozen=True)
class SetPrice(Command):
    """Price range selector; token is "", "<min>" or "<min>-<max>"."""

    command_type: ClassVar[str] = "set_price"

    token: str


@dataclass(frozen=True)
class SetSort(Command):
    command_type: ClassVar[str] = "set_sort"

    key: str


# ============================================================================
# Wishlist and Selection Commands
# ============================================================================


@dataclass(frozen=True)
class ToggleWishlist(Command):
    command_type: ClassVar[str] = "toggle_wishlist"

    product_id: str


@dataclass(frozen=True)
class OpenProduct(Command):
    command_type: ClassVar[str] = "open_product"

    product_id: str


@dataclass(frozen=True)
class ChooseVariant(Command):
    """Pick a shade of the open product by its position."""

    command_type: ClassVar[str] = "choose_variant"

    index: int


@dataclass(frozen=True)
class CloseProduct(Command):
    command_type: ClassVar[str] = "close_product"


# ============================================================================
# Command Registry
# ============================================================================


COMMAND_REGISTRY: dict[str, type[Command]] = {
    SetCategory.command_type: SetCategory,
    SetSearch.command_type: SetSearch,
    SetBrand.command_type: SetBrand,
    SetPrice.command_type: SetPrice,
    SetSort.command_type: SetSort,
    ToggleWishlist.command_type: ToggleWishlist,
    OpenProduct.command_type: OpenProduct,
    ChooseVariant.command_type: ChooseVariant,
    CloseProduct.command_type: CloseProduct,
}


def command_from_dict(data: dict[str, Any]) -> Command:
    """Decode a raw event into a typed command.

    Args:
        data: Mapping with a "type" key plus the command's fields.
            Values for integer fields may arrive as strings.

    Returns:
        Command instance.

    Raises:
        UnknownCommandError: If the type is not registered.
        InvalidCommandError: If a field is missing or cannot be converted.
    """
    command_type = str(data.get("type", ""))
    command_cls = COMMAND_REGISTRY.get(command_type)
    if command_cls is None:
        raise UnknownCommandError(command_type, sorted(COMMAND_REGISTRY))

    kwargs: dict[str, Any] = {}
    for f in fields(command_cls):
        if f.name not in data:
            if f.default is MISSING:
                raise InvalidCommandError(command_type, f"missing field '{f.name}'")
            continue
        value = data[f.name]
        try:
            kwargs[f.name] = int(value) if f.type is int else str(value)
        except (TypeError, ValueError) as e:
            raise InvalidCommandError(command_type, f"bad value for '{f.name}': {value!r}") from e

    return command_cls(**kwargs)
