"""Storefront domain — catalogue, shopping cart, orders, reviews, and notifications.

A single Protean domain holds every aggregate of the storefront so that the
cart can read product stock and reviews can read orders within one unit of
work. Bounded areas live in sub-packages (``catalogue``, ``ordering``,
``reviews``, ``notifications``) and are discovered by ``storefront.init()``.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
