"""Distance-threshold clustering of a day's activities."""

from __future__ import annotations

from itinerary_engine.domain.constants import DEFAULT_CLUSTER_DISTANCE_KM
from itinerary_engine.domain.models import Activity
from itinerary_engine.domain.planning.ordering import DistanceFn


def find_location_clusters(
    activities: list[Activity],
    *,
    distance_fn: DistanceFn,
    max_cluster_distance_km: float = DEFAULT_CLUSTER_DISTANCE_KM,
) -> list[list[Activity]]:
    """Single greedy pass: each unprocessed activity seeds a cluster of every
    other unprocessed activity within ``max_cluster_distance_km`` of it.
    """
    clusters: list[list[Activity]] = []
    processed: set[int] = set()
    for idx, seed in enumerate(activities):
        if idx in processed:
            continue
        processed.add(idx)
        cluster = [seed]
        for other_idx, other in enumerate(activities):
            if other_idx in processed:
                continue
            if distance_fn(seed.location, other.location) <= max_cluster_distance_km:
                cluster.append(other)
                processed.add(other_idx)
        clusters.append(cluster)
    return clusters


__all__ = ["find_location_clusters"]
