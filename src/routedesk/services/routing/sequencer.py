"""Greedy nearest-neighbour sequencing of delivery stops.

Starting from the first stop of the batch, the sequencer repeatedly moves to
the closest stop it has not visited yet. The result is a visiting order, not
a route geometry: the returned list holds the same order objects as the input.
Batches are small (tens of stops), so the quadratic scan is fine.
"""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Order
from ..geospatial import haversine_km, is_coordinate


def _has_coordinates(stop: Order) -> bool:
    return is_coordinate(stop.latitude) and is_coordinate(stop.longitude)


def address_distance(address_a: str, address_b: str) -> float:
    """Placeholder distance for stops without coordinates.

    Sum of the difference in address lengths and the difference of the first
    character codes. It carries no geographic meaning. An empty address has
    no first character, so the pair is treated as infinitely far apart.
    """
    address_a = address_a or ""
    address_b = address_b or ""
    if not address_a or not address_b:
        return math.inf
    return float(abs(len(address_a) - len(address_b)) + abs(ord(address_a[0]) - ord(address_b[0])))


def stop_distance(a: Order, b: Order) -> float:
    """Distance in kilometres between two stops, or the address placeholder."""
    if _has_coordinates(a) and _has_coordinates(b):
        return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
    return address_distance(a.delivery_address, b.delivery_address)


def sequence_stops(stops: Sequence[Order]) -> list[Order]:
    """Return ``stops`` reordered by a nearest-neighbour walk from the first stop.

    The input is copied before use and never modified. Ties go to the stop
    that appears first in the remaining input order.
    """
    unvisited = list(stops)
    if not unvisited:
        return []

    current = unvisited.pop(0)
    ordered = [current]
    while unvisited:
        nearest_index = 0
        nearest_distance = stop_distance(current, unvisited[0])
        for index in range(1, len(unvisited)):
            distance = stop_distance(current, unvisited[index])
            if distance < nearest_distance:
                nearest_index = index
                nearest_distance = distance
        current = unvisited.pop(nearest_index)
        ordered.append(current)
    return ordered
