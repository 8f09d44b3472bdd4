"""Order workflows shared by the order and route endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ...data import orders_repository
from ...models.domain import Order
from ..routing.sequencer import sequence_stops

SAMPLE_ORDERS: tuple[dict[str, Any], ...] = (
    {
        "customer_name": "John Smith",
        "delivery_address": "123 Main St, New York, NY",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "status": "pending",
    },
    {
        "customer_name": "Sarah Johnson",
        "delivery_address": "456 Broadway, New York, NY",
        "latitude": 40.7589,
        "longitude": -73.9851,
        "status": "pending",
    },
    {
        "customer_name": "Mike Davis",
        "delivery_address": "789 5th Ave, New York, NY",
        "latitude": 40.7505,
        "longitude": -73.9934,
        "status": "pending",
    },
    {
        "customer_name": "Emily Wilson",
        "delivery_address": "321 Park Ave, New York, NY",
        "latitude": 40.7489,
        "longitude": -73.9857,
        "status": "pending",
    },
    {
        "customer_name": "David Brown",
        "delivery_address": "654 Lexington Ave, New York, NY",
        "latitude": 40.7505,
        "longitude": -73.9934,
        "status": "pending",
    },
)


def list_orders() -> list[Order]:
    return orders_repository.list_orders()


def create_order(fields: Mapping[str, Any]) -> Order:
    order = orders_repository.create_order(fields)
    logging.info(f"Created order {order.order_id} for '{order.customer_name}'")
    return order


def update_order(order_id: str, changes: Mapping[str, Any]) -> Order | None:
    return orders_repository.update_order(order_id, changes)


def delete_order(order_id: str) -> Order | None:
    order = orders_repository.delete_order(order_id)
    if order is not None:
        logging.info(f"Deleted order {order_id}")
    return order


def search_orders(query: str | None) -> list[Order]:
    if query is None or not query.strip():
        raise ValueError("Search query is required")
    return orders_repository.search_orders(query)


def seed_sample_orders() -> list[Order]:
    """Replace every stored order with the Manhattan sample batch."""
    removed = orders_repository.delete_all_orders()
    created = orders_repository.create_orders(SAMPLE_ORDERS)
    logging.info(f"Replaced {removed} orders with {len(created)} sample orders")
    return created


def optimize_order_route() -> list[Order]:
    """Load all orders and return them in nearest-neighbour visiting order."""
    orders = orders_repository.list_orders()
    sequenced = sequence_stops(orders)
    logging.info(f"Sequenced {len(sequenced)} orders")
    return sequenced
