"""Order storage with a database-first approach, falling back to a JSON file.

When Supabase is configured every operation goes to the ``orders`` table.
Otherwise orders are kept in ``<data_root>/<orders_file_name>`` and rewritten
as a whole on each change; a module lock serialises writers within the process.
"""

from __future__ import annotations

import logging
import re
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Order
from ..persistence.filesystem import FileStorage

ORDERS_TABLE = "orders"
EDITABLE_FIELDS = ("customer_name", "delivery_address", "latitude", "longitude", "status")

_file_lock = threading.RLock()


class OrderStorageError(RuntimeError):
    """Raised when the order store cannot be read or written."""


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _row_to_order(row: Mapping[str, Any]) -> Order | None:
    try:
        return Order(
            order_id=str(row["id"]),
            customer_name=str(row["customer_name"]),
            delivery_address=str(row["delivery_address"]),
            latitude=_optional_float(row.get("latitude")),
            longitude=_optional_float(row.get("longitude")),
            status=str(row["status"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        logging.warning(f"Skipping invalid order row: {e}")
        return None


def _rows_to_orders(rows: Iterable[Mapping[str, Any]] | None) -> list[Order]:
    orders = []
    for row in rows or []:
        order = _row_to_order(row)
        if order is not None:
            orders.append(order)
    return orders


def _new_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    row = {name: fields.get(name) for name in EDITABLE_FIELDS}
    row["id"] = uuid.uuid4().hex
    row["created_at"] = datetime.now(timezone.utc).isoformat()
    return row


def _clean_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in changes.items() if name in EDITABLE_FIELDS}


def _quote_filter_value(value: str) -> str:
    """Quote a PostgREST filter value so commas and parentheses are taken literally."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"%{escaped}%"'


def _compile_query(query: str) -> re.Pattern[str]:
    try:
        return re.compile(query, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(query), re.IGNORECASE)


# ---------------------------------------------------------------------------
# File store
# ---------------------------------------------------------------------------

def _file_storage() -> FileStorage:
    return FileStorage()


def _read_file_rows(storage: FileStorage) -> list[dict[str, Any]]:
    path = storage.path_for(settings.orders_file_name)
    try:
        data = storage.read_json(path, default=[])
    except (OSError, ValueError) as e:
        raise OrderStorageError(f"Failed to read order file {path}: {e}") from e
    if not isinstance(data, list):
        raise OrderStorageError(f"Order file {path} does not contain a list")
    rows = []
    for row in data:
        if not isinstance(row, Mapping):
            logging.warning(f"Skipping non-object entry in order file {path}: {row!r}")
            continue
        rows.append(row)
    return rows


def _write_file_rows(storage: FileStorage, rows: list[dict[str, Any]]) -> None:
    path = storage.path_for(settings.orders_file_name)
    try:
        storage.write_json(path, rows)
    except (OSError, TypeError) as e:
        raise OrderStorageError(f"Failed to write order file {path}: {e}") from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def list_orders() -> list[Order]:
    """Return every stored order in insertion order."""
    supabase = get_supabase_client()
    if supabase:
        try:
            response = supabase.table(ORDERS_TABLE).select("*").order("created_at").execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to load orders from database: {e}") from e
        return _rows_to_orders(response.data)

    with _file_lock:
        return _rows_to_orders(_read_file_rows(_file_storage()))


def get_order(order_id: str) -> Order | None:
    supabase = get_supabase_client()
    if supabase:
        try:
            response = supabase.table(ORDERS_TABLE).select("*").eq("id", order_id).limit(1).execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to load order {order_id}: {e}") from e
        orders = _rows_to_orders(response.data)
        return orders[0] if orders else None

    with _file_lock:
        for row in _read_file_rows(_file_storage()):
            if str(row.get("id")) == order_id:
                return _row_to_order(row)
    return None


def create_orders(items: Iterable[Mapping[str, Any]]) -> list[Order]:
    """Insert several orders at once and return them with their new identifiers."""
    new_rows = [_new_row(fields) for fields in items]
    if not new_rows:
        return []

    supabase = get_supabase_client()
    if supabase:
        try:
            response = supabase.table(ORDERS_TABLE).insert(new_rows).execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to insert orders into database: {e}") from e
        return _rows_to_orders(response.data or new_rows)

    with _file_lock:
        storage = _file_storage()
        rows = _read_file_rows(storage)
        rows.extend(new_rows)
        _write_file_rows(storage, rows)
    logging.info(f"Stored {len(new_rows)} orders in {settings.orders_file_name}")
    return _rows_to_orders(new_rows)


def create_order(fields: Mapping[str, Any]) -> Order:
    created = create_orders([fields])
    if not created:
        raise OrderStorageError("Order store did not return the created order")
    return created[0]


def update_order(order_id: str, changes: Mapping[str, Any]) -> Order | None:
    """Apply a partial update; returns None when no order has ``order_id``."""
    cleaned = _clean_changes(changes)

    supabase = get_supabase_client()
    if supabase:
        if not cleaned:
            return get_order(order_id)
        try:
            response = supabase.table(ORDERS_TABLE).update(cleaned).eq("id", order_id).execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to update order {order_id}: {e}") from e
        orders = _rows_to_orders(response.data)
        return orders[0] if orders else None

    with _file_lock:
        storage = _file_storage()
        rows = _read_file_rows(storage)
        for row in rows:
            if str(row.get("id")) == order_id:
                row.update(cleaned)
                _write_file_rows(storage, rows)
                return _row_to_order(row)
    return None


def delete_order(order_id: str) -> Order | None:
    """Delete one order; returns the removed order or None when it does not exist."""
    supabase = get_supabase_client()
    if supabase:
        try:
            response = supabase.table(ORDERS_TABLE).delete().eq("id", order_id).execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to delete order {order_id}: {e}") from e
        orders = _rows_to_orders(response.data)
        return orders[0] if orders else None

    with _file_lock:
        storage = _file_storage()
        rows = _read_file_rows(storage)
        for index, row in enumerate(rows):
            if str(row.get("id")) == order_id:
                removed = rows.pop(index)
                _write_file_rows(storage, rows)
                return _row_to_order(removed)
    return None


def delete_all_orders() -> int:
    """Remove every order and return how many were removed."""
    supabase = get_supabase_client()
    if supabase:
        try:
            # PostgREST refuses an unfiltered delete
            response = supabase.table(ORDERS_TABLE).delete().neq("id", "").execute()
        except Exception as e:
            raise OrderStorageError(f"Failed to clear orders: {e}") from e
        return len(response.data or [])

    with _file_lock:
        storage = _file_storage()
        removed = len(_read_file_rows(storage))
        _write_file_rows(storage, [])
    return removed


def search_orders(query: str) -> list[Order]:
    """Case-insensitive match of ``query`` against customer name and delivery address.

    The file store treats the query as a regular expression and falls back to a
    literal match when it does not compile.
    """
    supabase = get_supabase_client()
    if supabase:
        quoted = _quote_filter_value(query)
        try:
            response = (
                supabase.table(ORDERS_TABLE)
                .select("*")
                .or_(f"customer_name.ilike.{quoted},delivery_address.ilike.{quoted}")
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise OrderStorageError(f"Failed to search orders: {e}") from e
        return _rows_to_orders(response.data)

    pattern = _compile_query(query)
    return [
        order
        for order in list_orders()
        if pattern.search(order.customer_name) or pattern.search(order.delivery_address)
    ]


def storage_backend() -> str:
    return "supabase" if get_supabase_client() else "file"
