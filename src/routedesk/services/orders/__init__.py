"""Order service helpers."""

from .service import (
    SAMPLE_ORDERS,
    create_order,
    delete_order,
    list_orders,
    optimize_order_route,
    search_orders,
    seed_sample_orders,
    update_order,
)

__all__ = [
    "SAMPLE_ORDERS",
    "list_orders",
    "create_order",
    "update_order",
    "delete_order",
    "search_orders",
    "seed_sample_orders",
    "optimize_order_route",
]
