"""Route optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...schemas.orders import OrderModel, StopModel
from ...schemas.routing import RouteErrorResponse, RouteOptimizationResponse, SampleOrdersResponse
from ...services.orders import optimize_order_route, seed_sample_orders

router = APIRouter(prefix="/routes", tags=["routes"])


def _failure(message: str, exc: Exception) -> JSONResponse:
    body = RouteErrorResponse(message=message, error=str(exc) or type(exc).__name__)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())


@router.get("/optimize", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize():
    try:
        sequenced = optimize_order_route()
    except Exception as exc:
        logging.exception(f"Error optimizing routes: {exc}")
        return _failure("Server error while optimizing routes", exc)

    stops = [StopModel.from_domain(order) for order in sequenced]
    return RouteOptimizationResponse(
        success=True,
        data=stops,
        totalOrders=len(stops),
        message=f"Optimized route for {len(stops)} orders",
    )


@router.post("/sample-orders", response_model=SampleOrdersResponse, status_code=status.HTTP_200_OK)
def create_sample_orders():
    try:
        created = seed_sample_orders()
    except Exception as exc:
        logging.exception(f"Error creating sample orders: {exc}")
        return _failure("Server error while creating sample orders", exc)

    return SampleOrdersResponse(
        success=True,
        message=f"Created {len(created)} sample orders for testing",
        orders=[OrderModel.from_domain(order) for order in created],
    )
