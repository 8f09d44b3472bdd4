"""Order request/response schemas.

Wire field names are camelCase to match the browser client; the storage
identifier travels as ``_id``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.domain import Order

_FIELD_NAMES = {
    "customerName": "customer_name",
    "deliveryAddress": "delivery_address",
    "latitude": "latitude",
    "longitude": "longitude",
    "status": "status",
}


def _strip_required(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
    return value


class StopModel(BaseModel):
    customerName: str
    deliveryAddress: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: str

    @classmethod
    def from_domain(cls, order: Order) -> "StopModel":
        return cls(
            customerName=order.customer_name,
            deliveryAddress=order.delivery_address,
            latitude=order.latitude,
            longitude=order.longitude,
            status=order.status,
        )


class OrderModel(StopModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderModel":
        return cls(
            id=order.order_id,
            customerName=order.customer_name,
            deliveryAddress=order.delivery_address,
            latitude=order.latitude,
            longitude=order.longitude,
            status=order.status,
        )


class OrderCreate(BaseModel):
    customerName: str = Field(..., description="Name of the customer receiving the delivery")
    deliveryAddress: str = Field(..., description="Free-text delivery address")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: str = Field(..., description="Free-text status label, e.g. 'pending'")

    @field_validator("customerName", "deliveryAddress", "status", mode="before")
    @classmethod
    def _not_blank(cls, value: Any) -> Any:
        return _strip_required(value)

    def to_fields(self) -> dict[str, Any]:
        return {_FIELD_NAMES[name]: value for name, value in self.model_dump().items()}


class OrderUpdate(BaseModel):
    """Partial update; only fields present in the request body are changed."""

    customerName: Optional[str] = None
    deliveryAddress: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: Optional[str] = None

    @field_validator("customerName", "deliveryAddress", "status", mode="before")
    @classmethod
    def _not_blank(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return _strip_required(value)

    def to_changes(self) -> dict[str, Any]:
        return {_FIELD_NAMES[name]: value for name, value in self.model_dump(exclude_unset=True).items()}


class DeleteOrderResponse(BaseModel):
    message: str
    order: OrderModel


class OrderSearchHit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    source: StopModel = Field(..., alias="_source")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderSearchHit":
        return cls(id=order.order_id, source=StopModel.from_domain(order))
