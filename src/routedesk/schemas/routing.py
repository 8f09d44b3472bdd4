"""Routing response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .orders import OrderModel, StopModel


class RouteOptimizationResponse(BaseModel):
    success: bool
    data: List[StopModel]
    totalOrders: int
    message: str


class SampleOrdersResponse(BaseModel):
    success: bool
    message: str
    orders: List[OrderModel]


class RouteErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
