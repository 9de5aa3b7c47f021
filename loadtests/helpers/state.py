"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. Ids returned by creation
endpoints are stored so later steps in a journey can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogueState:
    """Ids created by an admin building out the catalogue."""

    category_id: str | None = None
    subcategory_id: str | None = None
    collection_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    """Tracks one shopper from browsing through checkout and review."""

    user_id: str | None = None
    product: dict | None = None
    size: str | None = None
    item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    reviewed: bool = False
