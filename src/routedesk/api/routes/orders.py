"""Order CRUD and search endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from ...data.orders_repository import OrderStorageError
from ...schemas.orders import DeleteOrderResponse, OrderCreate, OrderModel, OrderSearchHit, OrderUpdate
from ...services import orders as order_service

router = APIRouter(prefix="/orders", tags=["orders"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def get_orders():
    try:
        orders = order_service.list_orders()
    except OrderStorageError as exc:
        logging.exception(f"Error listing orders: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    return [OrderModel.from_domain(order) for order in orders]


@router.post("", response_model=OrderModel, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate):
    try:
        order = order_service.create_order(payload.to_fields())
    except OrderStorageError as exc:
        logging.exception(f"Error creating order: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    return OrderModel.from_domain(order)


# Registered before the "/{order_id}" routes so "search" is never taken for an id.
@router.get("/search", response_model=List[OrderSearchHit], status_code=status.HTTP_200_OK)
def search_orders(query: str | None = Query(default=None, description="Text or pattern to match")):
    try:
        orders = order_service.search_orders(query)
    except ValueError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except OrderStorageError as exc:
        logging.exception(f"Search error: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error during search")
    return [OrderSearchHit.from_domain(order) for order in orders]


@router.put("/{order_id}", response_model=OrderModel, status_code=status.HTTP_200_OK)
def update_order(order_id: str, payload: OrderUpdate):
    try:
        order = order_service.update_order(order_id, payload.to_changes())
    except OrderStorageError as exc:
        logging.exception(f"Error updating order {order_id}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error during order update")
    if order is None:
        return _error(status.HTTP_404_NOT_FOUND, "Order not found")
    return OrderModel.from_domain(order)


@router.delete("/{order_id}", response_model=DeleteOrderResponse, status_code=status.HTTP_200_OK)
def delete_order(order_id: str):
    try:
        order = order_service.delete_order(order_id)
    except OrderStorageError as exc:
        logging.exception(f"Error deleting order {order_id}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    if order is None:
        return _error(status.HTTP_404_NOT_FOUND, "Order not found")
    return DeleteOrderResponse(message="Order deleted successfully", order=OrderModel.from_domain(order))
