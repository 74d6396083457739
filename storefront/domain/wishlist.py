"""Wishlist (favorites) store.

A set of product ids with toggle semantics, written through to
key-value storage after every change.
"""

import json
from collections.abc import Iterator

import structlog

from storefront.infrastructure.storage import KeyValueStorage, StorageError

logger = structlog.get_logger()

DEFAULT_STORAGE_KEY = "lm_wishlist"


class WishlistStore:
    """Persisted set of favorite product ids.

    The in-memory set is the source of truth for the session. Each
    toggle writes the full member list to storage before returning;
    a failed write is logged and does not undo the toggle.

    Example usage:
        wishlist = WishlistStore(JsonFileStorage(path))
        wishlist.toggle("p1")   # -> True, now a member
        "p1" in wishlist        # -> True
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        """Initialize store and restore members from storage.

        Args:
            storage: Durable key-value storage.
            key: Storage key holding the JSON array of ids.
        """
        self._storage = storage
        self._key = key
        # dict keeps insertion order for a stable persisted form
        self._members: dict[str, None] = dict.fromkeys(self._restore())

    def _restore(self) -> list[str]:
        """Read persisted ids; anything unusable restores as empty."""
        try:
            raw = self._storage.get(self._key)
        except (StorageError, OSError) as e:
            logger.warning("Wishlist storage unavailable, starting empty", key=self._key, error=str(e))
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed wishlist", key=self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Discarding wishlist that is not a list", key=self._key)
            return []

        return [item for item in data if isinstance(item, str)]

    def _persist(self) -> None:
        payload = json.dumps(list(self._members), ensure_ascii=False)
        try:
            self._storage.set(self._key, payload)
        except (StorageError, OSError) as e:
            logger.warning(
                "Failed to persist wishlist",
                key=self._key,
                members=len(self._members),
                error=str(e),
            )

    def is_member(self, product_id: str) -> bool:
        return product_id in self._members

    def toggle(self, product_id: str) -> bool:
        """Add the id if absent, remove it if present, then persist.

        Args:
            product_id: Product to toggle.

        Returns:
            Membership after the toggle.
        """
        if product_id in self._members:
            del self._members[product_id]
            member = False
        else:
            self._members[product_id] = None
            member = True

        self._persist()
        logger.info("Wishlist toggled", product_id=product_id, member=member)
        return member

    @property
    def members(self) -> frozenset[str]:
        return frozenset(self._members)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)
