import math
import random

import pytest

from routedesk.models.domain import Order
from routedesk.services.geospatial import haversine_km
from routedesk.services.routing import address_distance, sequence_stops, stop_distance


def _stop(name: str, lat: float | None, lon: float | None, address: str = "1 Test Rd") -> Order:
    return Order(
        order_id=name,
        customer_name=name,
        delivery_address=address,
        latitude=lat,
        longitude=lon,
        status="pending",
    )


def test_empty_and_single_input():
    assert sequence_stops([]) == []

    only = _stop("A", 0.0, 0.0)
    assert sequence_stops([only]) == [only]


def test_nearest_neighbour_order_on_equator():
    a = _stop("A", 0.0, 0.0)
    b = _stop("B", 0.0, 1.0)
    c = _stop("C", 0.0, 5.0)
    d = _stop("D", 0.0, 2.0)

    result = sequence_stops([a, b, c, d])

    assert [stop.customer_name for stop in result] == ["A", "B", "D", "C"]


def test_output_is_a_permutation_and_input_is_untouched():
    rng = random.Random(7)
    stops = [_stop(f"S{i}", rng.uniform(-60, 60), rng.uniform(-170, 170)) for i in range(25)]
    snapshot = list(stops)

    result = sequence_stops(stops)

    assert stops == snapshot
    assert len(result) == len(stops)
    assert {id(stop) for stop in result} == {id(stop) for stop in stops}
    assert result[0] is stops[0]


def test_sequencing_is_deterministic():
    rng = random.Random(11)
    stops = [_stop(f"S{i}", rng.uniform(20, 30), rng.uniform(40, 50)) for i in range(15)]

    first = sequence_stops(stops)
    second = sequence_stops(stops)

    assert [id(stop) for stop in first] == [id(stop) for stop in second]


def test_each_step_picks_the_closest_unvisited_stop():
    rng = random.Random(3)
    stops = [_stop(f"S{i}", rng.uniform(21, 22), rng.uniform(39, 40)) for i in range(12)]

    result = sequence_stops(stops)

    remaining = list(stops[1:])
    for current, chosen in zip(result, result[1:]):
        distances = [stop_distance(current, candidate) for candidate in remaining]
        expected = remaining[distances.index(min(distances))]
        assert chosen is expected
        remaining.remove(chosen)
    assert remaining == []


def test_ties_go_to_the_first_remaining_stop():
    start = _stop("start", 0.0, 0.0)
    east = _stop("east", 0.0, 1.0)
    west = _stop("west", 0.0, -1.0)

    assert [s.customer_name for s in sequence_stops([start, east, west])] == ["start", "east", "west"]
    assert [s.customer_name for s in sequence_stops([start, west, east])] == ["start", "west", "east"]


def test_duplicate_stops_are_kept():
    first = _stop("Same", 40.7505, -73.9934, address="654 Lexington Ave")
    second = _stop("Same", 40.7505, -73.9934, address="654 Lexington Ave")
    other = _stop("Other", 40.7128, -74.0060)

    result = sequence_stops([other, first, second])

    assert result[0] is other
    assert result[1] is first
    assert result[2] is second


def test_haversine_distance_is_symmetric_and_zero_on_same_point():
    a = _stop("A", 40.7128, -74.0060)
    b = _stop("B", 40.7589, -73.9851)

    assert stop_distance(a, b) == pytest.approx(stop_distance(b, a), abs=1e-9)
    assert stop_distance(a, a) == pytest.approx(0.0, abs=1e-9)
    assert stop_distance(a, b) == pytest.approx(haversine_km(40.7128, -74.0060, 40.7589, -73.9851))


def test_one_degree_of_longitude_on_equator():
    a = _stop("A", 0.0, 0.0)
    b = _stop("B", 0.0, 1.0)

    assert stop_distance(a, b) == pytest.approx(6371.0 * math.pi / 180, rel=1e-12)


def test_zero_coordinates_use_haversine():
    origin = _stop("Origin", 0.0, 0.0, address="x")
    north = _stop("North", 1.0, 0.0, address="a much longer address")

    assert stop_distance(origin, north) == pytest.approx(111.19492664455873, rel=1e-9)


def test_missing_coordinates_fall_back_to_address_heuristic():
    a = _stop("A", None, None, address="123 Main St")
    b = _stop("B", None, None, address="Broadway 456")

    # |11 - 12| + |ord('1') - ord('B')| = 1 + 17
    assert stop_distance(a, b) == 18.0
    assert address_distance("123 Main St", "Broadway 456") == 18.0


def test_one_side_without_coordinates_uses_fallback():
    located = _stop("Located", 40.0, -74.0, address="abcd")
    unlocated = _stop("Unlocated", None, -74.0, address="abc")

    assert stop_distance(located, unlocated) == 1.0


def test_nan_coordinates_are_not_usable():
    a = _stop("A", float("nan"), 1.0, address="aa")
    b = _stop("B", 1.0, 1.0, address="ab")

    assert stop_distance(a, b) == 0.0


def test_empty_address_without_coordinates_is_infinitely_far():
    blank = _stop("Blank", None, None, address="")
    other = _stop("Other", None, None, address="12 Elm St")

    assert stop_distance(blank, other) == math.inf


def test_stops_with_unusable_distances_are_still_visited():
    start = _stop("Start", None, None, address="")
    first = _stop("First", None, None, address="")
    second = _stop("Second", None, None, address="9 Oak Ave")

    result = sequence_stops([start, first, second])

    assert [s.customer_name for s in result] == ["Start", "First", "Second"]


def test_near_antipodal_stops_do_not_fail():
    a = _stop("A", -44.0875753669041, -1.6433686469012514)
    b = _stop("B", 44.0875753669051, 178.35663135309875)

    distance = stop_distance(a, b)

    assert distance == pytest.approx(math.pi * 6371.0, rel=1e-6)
    assert sequence_stops([a, b]) == [a, b]
