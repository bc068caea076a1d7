"""Route sequencing: nearest-neighbor seed + full 2-opt refinement.

Both heuristics work on an open path (no return to the first stop). The
distance function is injected so the domain layer stays free of geometry
details.
"""

from __future__ import annotations

from typing import Callable, Optional

from itinerary_engine.domain.models import Activity, Coordinate

DistanceFn = Callable[[Coordinate, Coordinate], float]

NEAREST_NEIGHBOR_MAX_SIZE = 3
_IMPROVEMENT_EPSILON = 1e-9


def path_distance_km(activities: list[Activity], *, distance_fn: DistanceFn) -> float:
    return sum(
        distance_fn(activities[i].location, activities[i + 1].location)
        for i in range(len(activities) - 1)
    )


def nearest_neighbor_order(
    activities: list[Activity],
    *,
    distance_fn: DistanceFn,
    start_location: Optional[Coordinate] = None,
) -> list[Activity]:
    if len(activities) <= 1:
        return list(activities)
    remaining = list(activities)
    first = 0
    if start_location is not None:
        first = _closest_index(remaining, start_location, distance_fn)
    current = remaining.pop(first)
    ordered = [current]
    while remaining:
        current = remaining.pop(_closest_index(remaining, current.location, distance_fn))
        ordered.append(current)
    return ordered


def _closest_index(candidates: list[Activity], origin: Coordinate, distance_fn: DistanceFn) -> int:
    # min() keeps the first of equal candidates, so ties go to input order.
    return min(range(len(candidates)), key=lambda idx: distance_fn(origin, candidates[idx].location))


def _reverse_segment(route: list[Activity], left: int, right: int) -> list[Activity]:
    return route[:left] + list(reversed(route[left : right + 1])) + route[right + 1 :]


def two_opt_order(route: list[Activity], *, distance_fn: DistanceFn) -> list[Activity]:
    """Refine ``route`` until no sub-path reversal shortens it.

    The first stop is never moved, which keeps a start-location anchor intact.
    """
    best = list(route)
    if len(best) < 4:
        return best
    best_dist = path_distance_km(best, distance_fn=distance_fn)
    improved = True
    while improved:
        improved = False
        for left in range(1, len(best) - 2):
            for right in range(left + 2, len(best)):
                candidate = _reverse_segment(best, left, right)
                distance = path_distance_km(candidate, distance_fn=distance_fn)
                if distance + _IMPROVEMENT_EPSILON < best_dist:
                    best = candidate
                    best_dist = distance
                    improved = True
    return best


def optimize_route_order(
    activities: list[Activity],
    *,
    distance_fn: DistanceFn,
    start_location: Optional[Coordinate] = None,
) -> list[Activity]:
    if len(activities) <= 1:
        return list(activities)
    seeded = nearest_neighbor_order(
        activities,
        distance_fn=distance_fn,
        start_location=start_location,
    )
    if len(seeded) <= NEAREST_NEIGHBOR_MAX_SIZE:
        return seeded
    return two_opt_order(seeded, distance_fn=distance_fn)


__all__ = [
    "DistanceFn",
    "NEAREST_NEIGHBOR_MAX_SIZE",
    "nearest_neighbor_order",
    "optimize_route_order",
    "path_distance_km",
    "two_opt_order",
]
