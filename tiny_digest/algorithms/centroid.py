"""
Centroids and the contiguous store that holds them.

A centroid stands in for a cluster of absorbed values by their weighted mean and
total weight. A digest keeps its centroids in a CentroidStore: two parallel
array.array columns (means and weights), sorted ascending by mean after every
compression. Neighbours are addressed by index.
"""

import array
import math
import sys
from typing import Dict, Iterable, Iterator, List, Tuple


def absorb(
    mean: float, weight: float, other_mean: float, other_weight: float
) -> Tuple[float, float]:
    """
    Combine two weighted points into their weighted mean and summed weight.

    The mean is updated incrementally, so the result always lies between the
    two input means and equal means combine exactly.
    """
    total = weight + other_weight
    return mean + (other_mean - mean) * other_weight / total, total


class Centroid:
    """An immutable weighted representative of a cluster of values."""

    __slots__ = ("_mean", "_weight")

    def __init__(self, mean: float, weight: float = 1.0):
        """
        Initialize a centroid with a mean value and weight.

        Raises:
            ValueError: If the mean is not finite or the weight is below 1.
        """
        mean = float(mean)
        weight = float(weight)
        if not math.isfinite(mean):
            raise ValueError(f"Centroid mean must be finite, got {mean}")
        if not weight >= 1.0 or not math.isfinite(weight):
            raise ValueError(f"Centroid weight must be at least 1, got {weight}")
        self._mean = mean
        self._weight = weight

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def weight(self) -> float:
        return self._weight

    def __lt__(self, other: "Centroid") -> bool:
        """Allow centroids to be sorted by mean value."""
        return self._mean < other._mean

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Centroid):
            return NotImplemented
        return self._mean == other._mean and self._weight == other._weight

    def __hash__(self) -> int:
        return hash((self._mean, self._weight))

    def __repr__(self) -> str:
        return f"Centroid(mean={self._mean:.4g}, weight={self._weight:.4g})"

    def to_dict(self) -> Dict[str, float]:
        """Serialize the centroid to a dictionary."""
        return {"mean": self._mean, "weight": self._weight}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "Centroid":
        """Deserialize a centroid from a dictionary."""
        if "mean" not in data or "weight" not in data:
            raise ValueError("Centroid dictionary missing 'mean' or 'weight'")
        return cls(mean=data["mean"], weight=data["weight"])


class CentroidStore:
    """
    Ordered, contiguous storage of (mean, weight) pairs.

    The store does not sort on its own: the compression engine appends
    centroids in ascending order of mean. Readers can check the ordering with
    is_sorted().
    """

    __slots__ = ("_means", "_weights", "_total_weight")

    def __init__(self) -> None:
        self._means = array.array("d")
        self._weights = array.array("d")
        self._total_weight = 0.0

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]]) -> "CentroidStore":
        """
        Build a store from (mean, weight) pairs, validating each one.

        Raises:
            ValueError: If a mean is not finite or a weight is below 1.
        """
        store = cls()
        for mean, weight in pairs:
            c = Centroid(mean, weight)
            store.append(c.mean, c.weight)
        return store

    def append(self, mean: float, weight: float) -> None:
        """Append a centroid. The caller keeps the means ordered."""
        self._means.append(mean)
        self._weights.append(weight)
        self._total_weight += weight

    def copy(self) -> "CentroidStore":
        """Return an independent copy of the store."""
        other = CentroidStore()
        other._means = array.array("d", self._means)
        other._weights = array.array("d", self._weights)
        other._total_weight = self._total_weight
        return other

    def pairs(self) -> List[Tuple[float, float]]:
        """Return the centroids as a list of (mean, weight) tuples."""
        return list(zip(self._means, self._weights))

    def is_sorted(self) -> bool:
        """True when means are non-decreasing."""
        means = self._means
        return all(means[i] <= means[i + 1] for i in range(len(means) - 1))

    @property
    def means(self) -> Tuple[float, ...]:
        return tuple(self._means)

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(self._weights)

    @property
    def total_weight(self) -> float:
        """Sum of all centroid weights."""
        return self._total_weight

    def mean_at(self, index: int) -> float:
        return self._means[index]

    def weight_at(self, index: int) -> float:
        return self._weights[index]

    def estimate_size(self) -> int:
        """Approximate memory held by the two columns, in bytes."""
        return (
            sys.getsizeof(self)
            + sys.getsizeof(self._means)
            + sys.getsizeof(self._weights)
        )

    def __len__(self) -> int:
        return len(self._means)

    def __bool__(self) -> bool:
        return len(self._means) > 0

    def __iter__(self) -> Iterator[Centroid]:
        for mean, weight in zip(self._means, self._weights):
            yield Centroid(mean, weight)

    def __getitem__(self, index: int) -> Centroid:
        return Centroid(self._means[index], self._weights[index])

    def __repr__(self) -> str:
        return f"CentroidStore(size={len(self)}, total_weight={self._total_weight:g})"
