"""Domain models for delivery orders."""

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, eq=False)
class Order:
    """A delivery order; the route sequencer treats each order as one stop.

    Equality is identity so that duplicated customers or addresses stay
    distinguishable when a batch is reordered.
    """

    order_id: str
    customer_name: str
    delivery_address: str
    latitude: Optional[float]
    longitude: Optional[float]
    status: str
