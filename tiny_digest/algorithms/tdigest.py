# tiny_digest/algorithms/tdigest.py

import bisect
import logging
import math
import sys
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union

from tiny_digest.algorithms.centroid import CentroidStore
from tiny_digest.algorithms.compression import compress as compress_centroids
from tiny_digest.algorithms.scale import (
    DEFAULT_SCALE,
    ScaleFunction,
    get_scale_function,
)
from tiny_digest.core import wire
from tiny_digest.core.base import QuantileEstimator
from tiny_digest.core.exceptions import (
    EmptyDigestError,
    IncompatibleDigestError,
    InvalidValueError,
)

logger = logging.getLogger(__name__)

# Type variable for the class itself (for from_dict)
TDigestType = TypeVar("TDigestType", bound="TDigest")

_DICT_VERSION = 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite(value: Any, name: str) -> float:
    if not _is_number(value) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def _combine(func, a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None:
        return b
    if b is None:
        return a
    return func(a, b)


class TDigest(QuantileEstimator):
    """
    T-Digest for efficient and accurate quantile estimation over data streams.

    The T-Digest (Dunning & Ertl, 2019) summarises a distribution with a sorted
    sequence of weighted centroids. Key properties:

    1. Memory usage is controlled by the compression parameter, not data size
    2. Accuracy is non-uniform: extreme quantiles (near 0 or 1) are more precise
    3. Mergeable: digests built on separate shards can be combined

    New values land in an unsorted buffer. When the buffer fills, or before any
    query, the buffer and the existing centroids are re-clustered in one sweep
    whose cluster sizes are bounded by a pluggable scale function.

    A digest is not thread-safe. Use one digest per writer and combine them
    with merge() or merge_all().
    """

    DEFAULT_COMPRESSION: int = 100
    DEFAULT_BUFFER_FACTOR: int = 5
    MIN_BUFFER_CAPACITY: int = 10

    def __init__(
        self,
        compression: float = DEFAULT_COMPRESSION,
        buffer_capacity: Optional[int] = None,
        scale: Union[str, ScaleFunction] = DEFAULT_SCALE,
        memory_limit_bytes: Optional[int] = None,
    ):
        """
        Initialize a TDigest.

        Args:
            compression: Controls accuracy and memory usage. Higher values
                improve accuracy at the cost of more centroids; the centroid
                count stays proportional to this value. Any positive finite
                number. Default: 100.
            buffer_capacity: Number of raw values held before compression runs.
                Defaults to DEFAULT_BUFFER_FACTOR * compression, at least
                MIN_BUFFER_CAPACITY.
            scale: Scale function name ('linear', 'arcsin', 'logit',
                'log-tails') or a ScaleFunction instance. Default: 'arcsin'.
            memory_limit_bytes: Optional memory budget reported by
                check_memory_limit().

        Raises:
            ValueError: If compression or buffer_capacity is invalid, or the
                scale function name is unknown.
        """
        super().__init__(memory_limit_bytes)
        if (
            not _is_number(compression)
            or not math.isfinite(compression)
            or compression <= 0
        ):
            raise ValueError(
                f"Compression must be a positive finite number, got {compression!r}"
            )

        if buffer_capacity is None:
            buffer_capacity = max(
                self.MIN_BUFFER_CAPACITY,
                int(self.DEFAULT_BUFFER_FACTOR * compression),
            )
        elif (
            not isinstance(buffer_capacity, int)
            or isinstance(buffer_capacity, bool)
            or buffer_capacity < 1
        ):
            raise ValueError(
                f"Buffer capacity must be a positive integer, got {buffer_capacity!r}"
            )

        self._compression = compression
        self._buffer_capacity: int = buffer_capacity
        self._scale: ScaleFunction = get_scale_function(scale)

        self._centroids = CentroidStore()
        self._buffer: List[float] = []
        self._min_val: Optional[float] = None
        self._max_val: Optional[float] = None

    #
    # Configuration and state
    #
    @property
    def compression(self) -> float:
        """The compression parameter (delta)."""
        return self._compression

    @property
    def buffer_capacity(self) -> int:
        """Number of buffered values that triggers a compression."""
        return self._buffer_capacity

    @property
    def scale(self) -> ScaleFunction:
        """The scale function bounding cluster sizes."""
        return self._scale

    @property
    def total_weight(self) -> float:
        """Sum of centroid weights plus the number of buffered values."""
        return self._centroids.total_weight + len(self._buffer)

    @property
    def min(self) -> Optional[float]:
        """Smallest value observed, or None for an empty digest."""
        return self._min_val

    @property
    def max(self) -> Optional[float]:
        """Largest value observed, or None for an empty digest."""
        return self._max_val

    @property
    def centroid_count(self) -> int:
        """Number of compressed centroids (buffered values not included)."""
        return len(self._centroids)

    @property
    def buffered_count(self) -> int:
        """Number of values waiting in the buffer."""
        return len(self._buffer)

    @property
    def is_empty(self) -> bool:
        """Check if the digest holds any weight."""
        return self.total_weight == 0

    def __len__(self) -> int:
        """Return the number of values processed by the digest."""
        return self.items_processed

    def __repr__(self) -> str:
        return (
            f"TDigest(compression={self._compression}, scale='{self._scale.name}', "
            f"centroids={len(self._centroids)}, total_weight={self.total_weight:g})"
        )

    #
    # Ingestion
    #
    def update(self, item: float) -> None:
        """
        Add a value to the digest.

        The value is appended to the buffer. When the buffer reaches its
        capacity, it is compressed into the centroids before returning.

        Args:
            item: Finite numeric value to add.

        Raises:
            InvalidValueError: If item is not a number or is NaN/infinite.
        """
        if not _is_number(item):
            raise InvalidValueError(
                f"Cannot add non-numeric value of type {type(item).__name__}"
            )
        if not math.isfinite(item):
            raise InvalidValueError(f"Cannot add non-finite value {item}")

        super().update(item)

        item = float(item)
        self._buffer.append(item)

        if self._min_val is None or item < self._min_val:
            self._min_val = item
        if self._max_val is None or item > self._max_val:
            self._max_val = item

        if len(self._buffer) >= self._buffer_capacity:
            self.compress()

    add = update

    def update_many(self, items: Iterable[float]) -> None:
        """
        Add every value of an iterable.

        Values before an invalid one remain added.

        Raises:
            InvalidValueError: On the first invalid value.
        """
        for item in items:
            self.update(item)

    def compress(self) -> None:
        """
        Fold buffered values into the centroids.

        Does nothing when the buffer is empty.
        """
        if not self._buffer:
            return

        self._centroids = compress_centroids(
            self._centroids.pairs(), self._buffer, self._compression, self._scale
        )
        self._buffer = []

    force_compress = compress

    #
    # Queries
    #
    def _check_not_empty(self) -> None:
        if not self._centroids or self._centroids.total_weight == 0:
            raise EmptyDigestError("Cannot query an empty digest")

    def quantile(self, q: float) -> float:
        """
        Estimate the value at the given quantile.

        The target weight q * total_weight is located between the midpoints
        of two adjacent centroids and the estimate is linearly interpolated
        between their means. Targets before the first centroid's midpoint
        return its mean, targets after the last centroid's midpoint return the
        last mean.

        Args:
            q: Target quantile between 0.0 and 1.0.

        Returns:
            Estimated value at the specified quantile.

        Raises:
            ValueError: If q is not between 0.0 and 1.0.
            EmptyDigestError: If the digest holds no data.
        """
        if not _is_number(q) or not (0.0 <= q <= 1.0):
            raise ValueError(f"Quantile must be between 0.0 and 1.0, got {q!r}")

        self.compress()
        self._check_not_empty()

        store = self._centroids
        n = len(store)
        total = store.total_weight
        index = q * total

        if n == 1:
            return store.mean_at(0)
        if index <= store.weight_at(0) / 2.0:
            return store.mean_at(0)
        if index >= total - store.weight_at(n - 1) / 2.0:
            return store.mean_at(n - 1)

        # Cumulative weight at the midpoint of centroid i
        cumulative = store.weight_at(0) / 2.0
        for i in range(n - 1):
            span = (store.weight_at(i) + store.weight_at(i + 1)) / 2.0
            if cumulative + span >= index:
                left = store.mean_at(i)
                right = store.mean_at(i + 1)
                fraction = (index - cumulative) / span
                return left + fraction * (right - left)
            cumulative += span

        return store.mean_at(n - 1)

    def rank(self, value: float) -> float:
        """
        Estimate the fraction of the data at or below value.

        This inverts the piecewise-linear mapping used by quantile(). A value
        that coincides with one or more centroid means returns the middle of
        the rank interval those centroids cover.

        Args:
            value: Finite value to locate.

        Returns:
            A fraction in [0, 1]: 0.0 below the first centroid mean, 1.0
            above the last.

        Raises:
            InvalidValueError: If value is not a finite number.
            EmptyDigestError: If the digest holds no data.
        """
        if not _is_number(value) or not math.isfinite(value):
            raise InvalidValueError(f"Cannot rank non-finite value {value!r}")

        self.compress()
        self._check_not_empty()

        means = self._centroids.means
        weights = self._centroids.weights
        total = self._centroids.total_weight

        if value < means[0]:
            return 0.0
        if value > means[-1]:
            return 1.0

        midpoints = []
        cumulative = 0.0
        for w in weights:
            midpoints.append(cumulative + w / 2.0)
            cumulative += w

        lo = bisect.bisect_left(means, value)
        hi = bisect.bisect_right(means, value)

        if lo < hi:
            start = 0.0 if lo == 0 else midpoints[lo]
            end = total if hi == len(means) else midpoints[hi - 1]
            return (start + end) / 2.0 / total

        prev = lo - 1
        fraction = (value - means[prev]) / (means[lo] - means[prev])
        position = midpoints[prev] + fraction * (midpoints[lo] - midpoints[prev])
        return position / total

    def get_centroids(self) -> List[Tuple[float, float]]:
        """
        Return the current centroids as (mean, weight) tuples, sorted by mean.

        The buffer is compressed first.
        """
        self.compress()
        return self._centroids.pairs()

    #
    # Merging
    #
    def merge(self, other: "TDigest") -> "TDigest":
        """
        Merge this digest with another T-Digest.

        Creates a new digest representing the combined data of both inputs.
        Neither input is modified, their buffers included. The result uses the
        larger of the two compression values and buffer capacities so that
        merging never silently lowers accuracy.

        Args:
            other: Another TDigest using the same scale function family.

        Returns:
            A new, compressed TDigest.

        Raises:
            TypeError: If 'other' is not a TDigest.
            IncompatibleDigestError: If the scale functions differ.
        """
        self._check_same_type(other)

        if self._scale != other._scale:
            raise IncompatibleDigestError(
                f"Cannot merge digests with different scale functions: "
                f"'{self._scale.name}' != '{other._scale.name}'"
            )

        merged = self.__class__(
            compression=max(self._compression, other._compression),
            buffer_capacity=max(self._buffer_capacity, other._buffer_capacity),
            scale=self._scale,
            memory_limit_bytes=self._memory_limit_bytes,
        )
        merged._centroids = compress_centroids(
            self._centroids.pairs() + other._centroids.pairs(),
            self._buffer + other._buffer,
            merged._compression,
            merged._scale,
        )
        merged._items_processed = self._combine_items_processed(other)
        merged._min_val = _combine(min, self._min_val, other._min_val)
        merged._max_val = _combine(max, self._max_val, other._max_val)

        logger.debug(
            "Merged digests of weight %g and %g into %d centroids",
            self.total_weight,
            other.total_weight,
            len(merged._centroids),
        )
        return merged

    @classmethod
    def merge_all(cls: Type[TDigestType], digests: Iterable[TDigestType]) -> TDigestType:
        """
        Combine any number of digests by pairwise merging in a balanced tree.

        Args:
            digests: Digests sharing one scale function family.

        Returns:
            A new TDigest; the inputs are not modified.

        Raises:
            ValueError: If no digests are given.
            IncompatibleDigestError: If the scale functions differ.
        """
        level = list(digests)
        if not level:
            raise ValueError("merge_all() needs at least one digest")
        if len(level) == 1:
            return level[0].copy()

        while len(level) > 1:
            paired = [
                level[i].merge(level[i + 1]) for i in range(0, len(level) - 1, 2)
            ]
            if len(level) % 2:
                paired.append(level[-1])
            level = paired
        return level[0]

    def copy(self: TDigestType) -> TDigestType:
        """Return an independent copy of this digest."""
        clone = self.__class__(
            compression=self._compression,
            buffer_capacity=self._buffer_capacity,
            scale=self._scale,
            memory_limit_bytes=self._memory_limit_bytes,
        )
        clone._centroids = self._centroids.copy()
        clone._buffer = list(self._buffer)
        clone._items_processed = self._items_processed
        clone._min_val = self._min_val
        clone._max_val = self._max_val
        return clone

    #
    # Serialization
    #
    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the T-Digest to a dictionary.

        Compresses the buffer first to ensure a complete state snapshot.

        Returns:
            Dictionary containing the digest configuration and internal state.
        """
        self.compress()

        state = self._base_dict()
        state.update(
            {
                "version": _DICT_VERSION,
                "compression": self._compression,
                "buffer_capacity": self._buffer_capacity,
                "scale": self._scale.name,
                "total_weight": self._centroids.total_weight,
                "min_val": self._min_val,
                "max_val": self._max_val,
                "centroids": [c.to_dict() for c in self._centroids],
            }
        )
        return state

    @classmethod
    def from_dict(cls: Type[TDigestType], data: Dict[str, Any]) -> TDigestType:
        """
        Deserialize a T-Digest from a dictionary representation.

        Args:
            data: Dictionary created by to_dict().

        Returns:
            A reconstructed TDigest instance.

        Raises:
            IncompatibleDigestError: If the dictionary is missing required keys
                or its state violates the centroid invariants.
        """
        if not isinstance(data, dict):
            raise IncompatibleDigestError(
                f"Expected a dictionary for TDigest, got {type(data).__name__}"
            )

        if data.get("type") != cls.__name__:
            raise IncompatibleDigestError(
                f"Dictionary represents class '{data.get('type')}' but expected '{cls.__name__}'"
            )

        required_keys = {"compression", "total_weight", "centroids", "items_processed"}
        missing_keys = required_keys - data.keys()
        if missing_keys:
            raise IncompatibleDigestError(
                f"Invalid dictionary format for TDigest. Missing keys: {missing_keys}"
            )

        version = data.get("version", _DICT_VERSION)
        if version != _DICT_VERSION:
            raise IncompatibleDigestError(f"Unsupported TDigest version {version}")

        try:
            pairs = [(float(c["mean"]), float(c["weight"])) for c in data["centroids"]]
            total_weight = _finite(data["total_weight"], "total_weight")
            items_processed = data["items_processed"]
            if (
                not isinstance(items_processed, int)
                or isinstance(items_processed, bool)
                or items_processed < 0
            ):
                raise ValueError(
                    f"items_processed must be a non-negative integer, got {items_processed!r}"
                )
            min_val = data.get("min_val")
            max_val = data.get("max_val")
            if min_val is not None:
                min_val = _finite(min_val, "min_val")
            if max_val is not None:
                max_val = _finite(max_val, "max_val")
        except (KeyError, TypeError, ValueError) as e:
            raise IncompatibleDigestError(f"Error deserializing TDigest: {e}") from e

        wire.validate_centroids(pairs)

        total = sum(weight for _, weight in pairs)
        if not math.isclose(total, total_weight, rel_tol=1e-9, abs_tol=1e-9):
            raise IncompatibleDigestError(
                f"Centroid weights sum to {total}, but total_weight is {total_weight}"
            )

        if pairs:
            if min_val is not None and min_val > pairs[0][0]:
                raise IncompatibleDigestError(
                    f"min_val {min_val} is above the first centroid mean {pairs[0][0]}"
                )
            if max_val is not None and max_val < pairs[-1][0]:
                raise IncompatibleDigestError(
                    f"max_val {max_val} is below the last centroid mean {pairs[-1][0]}"
                )
        elif min_val is not None or max_val is not None:
            raise IncompatibleDigestError("Empty TDigest cannot carry min_val or max_val")

        instance = cls._from_state(
            wire.DigestState(
                scale=data.get("scale", DEFAULT_SCALE),
                compression=data["compression"],
                buffer_capacity=data.get("buffer_capacity"),
                min_val=min_val,
                max_val=max_val,
                centroids=pairs,
            ),
            memory_limit_bytes=data.get("memory_limit_bytes"),
        )
        instance._items_processed = items_processed
        return instance

    def _to_state(self) -> wire.DigestState:
        self.compress()
        return wire.DigestState(
            scale=self._scale.name,
            compression=self._compression,
            buffer_capacity=self._buffer_capacity,
            min_val=self._min_val,
            max_val=self._max_val,
            centroids=self._centroids.pairs(),
        )

    @classmethod
    def _from_state(
        cls: Type[TDigestType],
        state: wire.DigestState,
        memory_limit_bytes: Optional[int] = None,
    ) -> TDigestType:
        try:
            instance = cls(
                compression=state.compression,
                buffer_capacity=state.buffer_capacity,
                scale=state.scale,
                memory_limit_bytes=memory_limit_bytes,
            )
        except (TypeError, ValueError) as e:
            raise IncompatibleDigestError(f"Invalid digest configuration: {e}") from e

        instance._centroids = CentroidStore.from_pairs(state.centroids)
        if instance._centroids:
            instance._min_val = (
                state.min_val if state.min_val is not None else state.centroids[0][0]
            )
            instance._max_val = (
                state.max_val if state.max_val is not None else state.centroids[-1][0]
            )
        instance._items_processed = int(instance._centroids.total_weight)
        return instance

    def _to_binary(self) -> bytes:
        return wire.encode(self._to_state())

    @classmethod
    def _from_binary(cls: Type[TDigestType], data: bytes) -> TDigestType:
        state = wire.decode(data)
        logger.debug("Restoring %s from %d bytes", cls.__name__, len(data))
        return cls._from_state(state)

    def to_bytes(self) -> bytes:
        """Encode the digest in the versioned binary wire form."""
        return self._to_binary()

    @classmethod
    def from_bytes(cls: Type[TDigestType], data: bytes) -> TDigestType:
        """
        Decode a digest produced by to_bytes().

        Raises:
            IncompatibleDigestError: If the bytes are malformed or corrupt.
        """
        return cls._from_binary(data)

    #
    # Introspection
    #
    def estimate_size(self) -> int:
        """
        Estimate the memory footprint of the T-Digest in bytes.

        Returns:
            Estimated size in bytes.
        """
        size = super().estimate_size()
        size += self._centroids.estimate_size()
        size += sys.getsizeof(self._buffer)
        if self._buffer:
            size += len(self._buffer) * sys.getsizeof(0.0)
        return size

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the T-Digest.

        Returns:
            A dictionary describing configuration, centroid structure and the
            error model.
        """
        self.compress()

        stats = super().get_stats()
        stats.update(
            {
                "compression": self._compression,
                "scale": self._scale.name,
                "buffer_capacity": self._buffer_capacity,
                "buffer_items": len(self._buffer),
                "total_weight": self.total_weight,
                "num_centroids": len(self._centroids),
                "compression_ratio": len(self._centroids) / self._compression,
            }
        )

        if self._min_val is not None:
            stats["min_value"] = self._min_val
        if self._max_val is not None:
            stats["max_value"] = self._max_val

        if self._centroids:
            weights = self._centroids.weights
            stats.update(
                {
                    "min_weight": min(weights),
                    "max_weight": max(weights),
                    "avg_weight": sum(weights) / len(weights),
                }
            )

        stats.update(self.error_bounds())

        if self.items_processed > 0:
            stats["bytes_per_item"] = self.estimate_size() / self.items_processed

        return stats

    def error_bounds(self) -> Dict[str, Any]:
        """
        Describe the error model of this digest.

        T-Digest error is non-uniform and empirical, not a formal guarantee.
        For the arcsin scale the rank error near quantile q is roughly
        proportional to sqrt(q(1-q)) / compression; the reported per-quantile
        figures use that model.
        """
        if self.is_empty:
            return {"state": "empty"}

        c = self._compression
        bounds: Dict[str, Any] = {
            "accuracy_model": "non-uniform (higher at tails)",
            "scale": self._scale.name,
            "expected_max_centroids": math.ceil(c) + 2,
        }
        bounds["error_bounds"] = {
            f"q{q:.3f}": math.sqrt(q * (1 - q)) * math.pi / c
            for q in (0.001, 0.01, 0.05, 0.25, 0.5, 0.75, 0.95, 0.99, 0.999)
        }
        return bounds

    def analyze_quantile_accuracy(
        self, reference_data: List[float]
    ) -> Dict[str, Any]:
        """
        Compare quantile estimates against the exact quantiles of a dataset.

        Args:
            reference_data: The values the digest was built from (or a sample
                of the same distribution).

        Returns:
            Exact values, estimates, absolute and relative errors per quantile,
            plus tail and middle averages.

        Raises:
            ValueError: If reference_data is empty.
        """
        if not reference_data:
            raise ValueError("Reference data is empty")

        sorted_data = sorted(reference_data)
        data_len = len(sorted_data)
        quantiles = [0.001, 0.01, 0.05, 0.1, 0.25, 0.5, 0.75, 0.9, 0.95, 0.99, 0.999]

        exact: Dict[str, float] = {}
        estimates: Dict[str, float] = {}
        abs_errors: Dict[str, float] = {}
        rel_errors: Dict[str, float] = {}
        for q in quantiles:
            key = f"q{q:.3f}"
            exact[key] = sorted_data[min(int(q * data_len), data_len - 1)]
            estimates[key] = self.quantile(q)
            abs_errors[key] = abs(estimates[key] - exact[key])
            rel_errors[key] = (
                abs_errors[key] / abs(exact[key])
                if abs(exact[key]) > 1e-10
                else abs_errors[key]
            )

        tail_keys = ("q0.001", "q0.010", "q0.990", "q0.999")
        mid_keys = ("q0.250", "q0.500", "q0.750")
        return {
            "compression": self._compression,
            "scale": self._scale.name,
            "num_centroids": len(self._centroids),
            "reference_data_size": data_len,
            "exact_quantiles": exact,
            "estimates": estimates,
            "absolute_errors": abs_errors,
            "relative_errors": rel_errors,
            "max_relative_error": max(rel_errors.values()),
            "avg_tail_error": sum(rel_errors[k] for k in tail_keys) / len(tail_keys),
            "avg_mid_error": sum(rel_errors[k] for k in mid_keys) / len(mid_keys),
        }

    def get_centroid_distribution(self) -> Dict[str, Any]:
        """
        Summarise how centroids and their weight are spread over quantiles.

        T-Digest should place small centroids at both tails and large ones in
        the middle; the tail/middle split here is by cumulative weight.
        """
        self.compress()

        distribution: Dict[str, Any] = {
            "num_centroids": len(self._centroids),
            "total_weight": self._centroids.total_weight,
        }
        if not self._centroids:
            distribution["state"] = "empty"
            return distribution

        total = self._centroids.total_weight
        regions = {"lower_tail": [], "middle": [], "upper_tail": []}
        cumulative = 0.0
        for c in self._centroids:
            position = (cumulative + c.weight / 2.0) / total
            if position < 0.1:
                regions["lower_tail"].append(c.weight)
            elif position > 0.9:
                regions["upper_tail"].append(c.weight)
            else:
                regions["middle"].append(c.weight)
            cumulative += c.weight

        for name, weights in regions.items():
            distribution[f"{name}_centroids"] = len(weights)
            distribution[f"{name}_avg_weight"] = (
                sum(weights) / len(weights) if weights else 0.0
            )

        distribution["value_range"] = [
            self._centroids.mean_at(0),
            self._centroids.mean_at(len(self._centroids) - 1),
        ]
        return distribution

    def clear(self) -> None:
        """
        Reset the T-Digest to its initial empty state.

        Configuration parameters are preserved.
        """
        super().clear()
        self._centroids = CentroidStore()
        self._buffer = []
        self._min_val = None
        self._max_val = None

    @classmethod
    def create_from_accuracy_target(
        cls, accuracy_target: float, tail_focus: bool = True
    ) -> "TDigest":
        """
        Create a T-Digest with a compression factor sized for a target error.

        Args:
            accuracy_target: Target rank error for quantile estimates (0.0-1.0).
                            Lower values create more accurate but larger digests.
            tail_focus: If True, sizes for accuracy at the tails (0.01, 0.99).
                       If False, sizes for accuracy at the median.

        Returns:
            A new T-Digest configured for the target accuracy.

        Raises:
            ValueError: If accuracy_target is not between 0 and 1.
        """
        if not (0.0 < accuracy_target < 1.0):
            raise ValueError("Accuracy target must be between 0 and 1")

        # Invert the error model of error_bounds(): pi * sqrt(q(1-q)) / c
        q = 0.01 if tail_focus else 0.5
        compression = math.ceil(math.pi * math.sqrt(q * (1 - q)) / accuracy_target)

        return cls(compression=max(20, compression))


def create(
    compression: float = TDigest.DEFAULT_COMPRESSION,
    buffer_capacity: Optional[int] = None,
    scale: Union[str, ScaleFunction] = DEFAULT_SCALE,
) -> TDigest:
    """Create an empty digest."""
    return TDigest(compression=compression, buffer_capacity=buffer_capacity, scale=scale)


def merge(a: TDigest, b: TDigest) -> TDigest:
    """Merge two digests into a new one. See TDigest.merge()."""
    return a.merge(b)
