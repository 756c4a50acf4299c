"""
Compression engine for the t-digest.

Existing centroids and buffered raw values are folded into a new, sorted
centroid sequence in one greedy left-to-right sweep. A cluster opened at
cumulative quantile q may absorb neighbours while its weight stays within the
bound the scale function allows at q; the next candidate that would exceed it
opens a new cluster.

The lowest and highest points are never absorbed: each is emitted as a cluster
of its own, so a digest built from raw values keeps its exact minimum and
maximum as its outermost centroids.

Total weight is preserved exactly, and the weighted mean up to floating-point
rounding: clusters are only ever combined by weighted averaging.
"""

import logging
from operator import itemgetter
from typing import Iterable, List, Sequence, Tuple

from tiny_digest.algorithms.centroid import CentroidStore, absorb
from tiny_digest.algorithms.scale import ScaleFunction

logger = logging.getLogger(__name__)

_by_mean = itemgetter(0)


def compress(
    centroids: Iterable[Tuple[float, float]],
    buffered: Sequence[float],
    compression: float,
    scale: ScaleFunction,
) -> CentroidStore:
    """
    Cluster centroids and raw values into a new CentroidStore.

    Args:
        centroids: Existing (mean, weight) pairs, in any order. A CentroidStore
                   may be passed via its pairs() method.
        buffered: Raw values; each one enters as a centroid of weight 1.
        compression: The compression parameter handed to the scale function.
        scale: Scale function bounding cluster weight by quantile position.

    Returns:
        A new store sorted ascending by mean. The inputs are not modified.
    """
    points: List[Tuple[float, float]] = list(centroids)
    points.extend((value, 1.0) for value in buffered)

    result = CentroidStore()
    if not points:
        return result

    # list.sort is stable: equal means keep their insertion order.
    points.sort(key=_by_mean)
    total_weight = sum(weight for _, weight in points)

    first_mean, first_weight = points[0]
    result.append(first_mean, first_weight)

    inner = points[1:-1]
    if inner:
        weight_so_far = first_weight
        current_mean, current_weight = inner[0]
        limit = scale.max_weight(
            weight_so_far / total_weight, compression, total_weight
        )

        for mean, weight in inner[1:]:
            if current_weight + weight <= limit:
                current_mean, current_weight = absorb(
                    current_mean, current_weight, mean, weight
                )
            else:
                result.append(current_mean, current_weight)
                weight_so_far += current_weight
                limit = scale.max_weight(
                    weight_so_far / total_weight, compression, total_weight
                )
                current_mean, current_weight = mean, weight

        result.append(current_mean, current_weight)

    if len(points) > 1:
        last_mean, last_weight = points[-1]
        result.append(last_mean, last_weight)

    logger.debug(
        "Compressed %d points (weight %g) into %d centroids",
        len(points),
        total_weight,
        len(result),
    )
    return result
