from pathlib import Path

import pytest

from routedesk.data import orders_repository
from routedesk.persistence.filesystem import FileStorage
from routedesk.services import orders as order_service


@pytest.fixture(autouse=True)
def file_store(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(orders_repository, "get_supabase_client", lambda: None)
    monkeypatch.setattr(orders_repository, "_file_storage", lambda: FileStorage(root=tmp_path))


@pytest.mark.parametrize("query", [None, "", "   "])
def test_search_requires_a_query(query):
    with pytest.raises(ValueError, match="Search query is required"):
        order_service.search_orders(query)


def test_seed_sample_orders_replaces_existing_orders():
    order_service.create_order(
        {
            "customer_name": "Old",
            "delivery_address": "1 Old Rd",
            "latitude": None,
            "longitude": None,
            "status": "delivered",
        }
    )

    created = order_service.seed_sample_orders()

    assert len(created) == 5
    names = [order.customer_name for order in order_service.list_orders()]
    assert names == ["John Smith", "Sarah Johnson", "Mike Davis", "Emily Wilson", "David Brown"]
    assert all(order.status == "pending" for order in created)


def test_optimize_order_route_sequences_sample_batch():
    order_service.seed_sample_orders()

    sequenced = order_service.optimize_order_route()

    assert [order.customer_name for order in sequenced] == [
        "John Smith",
        "Mike Davis",
        "David Brown",
        "Emily Wilson",
        "Sarah Johnson",
    ]


def test_optimize_order_route_with_no_orders():
    assert order_service.optimize_order_route() == []
