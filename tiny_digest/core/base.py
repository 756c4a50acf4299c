"""
Base classes and interfaces for tiny-digest summaries.

This module defines the abstract base classes that quantile summaries implement
to provide a consistent interface: updating with new values, querying, merging,
serialization, and the introspection hooks used for benchmarking.
"""

import abc
import json
import sys
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

from tiny_digest.core.exceptions import IncompatibleDigestError

T = TypeVar("T")  # Type for the items being processed
R = TypeVar("R")  # Type for the result of queries


class StreamSummary(Generic[T, R], abc.ABC):
    """
    Abstract base class for all streaming summaries.

    This class defines the common interface that summaries must implement,
    including methods for updating with new items, querying results, merging
    with other summaries, and serialization.
    """

    def __init__(self, memory_limit_bytes: Optional[int] = None):
        """
        Initialize a new stream summary.

        Args:
            memory_limit_bytes: Optional maximum memory usage in bytes.
                                None means no explicit limit.
        """
        if memory_limit_bytes is not None and memory_limit_bytes <= 0:
            raise ValueError("Memory limit must be positive")
        self._memory_limit_bytes = memory_limit_bytes
        self._items_processed = 0

    @abc.abstractmethod
    def update(self, item: T) -> None:
        """
        Update the summary with a new item from the stream.

        Derived classes validate the item first and call super().update(item)
        once it has been accepted.

        Args:
            item: The new item to process.
        """
        self._items_processed += 1

    @abc.abstractmethod
    def query(self, *args: Any, **kwargs: Any) -> R:
        """
        Query the current state of the summary.

        The parameters and return value depend on the specific summary.
        """
        pass

    @abc.abstractmethod
    def merge(self, other: "StreamSummary[T, R]") -> "StreamSummary[T, R]":
        """
        Merge this summary with another of the same type.

        Args:
            other: Another stream summary of the same type.

        Returns:
            A new merged stream summary. Neither input is modified.

        Raises:
            TypeError: If other is not of the same type.
        """
        pass

    def _check_same_type(self, other: "StreamSummary[T, R]") -> None:
        """
        Helper method to check if another summary is of the same type.

        Raises:
            TypeError: If other is not of the same type.
        """
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot merge with {other.__class__.__name__}")

    def _combine_items_processed(self, other: "StreamSummary[T, R]") -> int:
        """Combined count of processed items, used when merging."""
        return self._items_processed + other._items_processed

    @abc.abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the summary to a dictionary for serialization.

        Returns:
            A dictionary representation of the summary.
        """
        pass

    def _base_dict(self) -> Dict[str, Any]:
        """
        Create a dictionary with base attributes common to all summaries.

        Returns:
            A dictionary with base attributes.
        """
        return {
            "type": self.__class__.__name__,
            "items_processed": self._items_processed,
            "memory_limit_bytes": self._memory_limit_bytes,
        }

    @classmethod
    @abc.abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamSummary[T, R]":
        """
        Create a summary from a dictionary representation.

        Args:
            data: The dictionary containing the summary state.

        Returns:
            A new stream summary initialized with the given state.
        """
        pass

    def _to_binary(self) -> bytes:
        """Binary encoding hook. Defaults to UTF-8 encoded JSON."""
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def _from_binary(cls, data: bytes) -> "StreamSummary[T, R]":
        """Binary decoding hook matching _to_binary."""
        return cls.from_dict(json.loads(data.decode("utf-8")))

    def serialize(self, format: str = "json") -> Union[str, bytes]:
        """
        Serialize the summary to a string or bytes.

        Args:
            format: The serialization format ('json' or 'binary').

        Returns:
            A JSON string for 'json', bytes for 'binary'.

        Raises:
            ValueError: If the format is not supported.
        """
        if format == "json":
            return json.dumps(self.to_dict())
        elif format == "binary":
            return self._to_binary()
        else:
            raise ValueError(f"Unsupported serialization format: {format}")

    @classmethod
    def deserialize(
        cls, data: Union[str, bytes], format: str = "json"
    ) -> "StreamSummary[T, R]":
        """
        Deserialize a summary from a string or bytes.

        Args:
            data: The serialized summary.
            format: The serialization format ('json' or 'binary').

        Returns:
            A new stream summary.

        Raises:
            ValueError: If the format is not supported.
            IncompatibleDigestError: If a JSON payload cannot be parsed.
        """
        if format == "json":
            try:
                if isinstance(data, bytes):
                    data = data.decode("utf-8")
                state = json.loads(data)
            except ValueError as e:
                raise IncompatibleDigestError(f"Malformed JSON payload: {e}") from e
            return cls.from_dict(state)
        elif format == "binary":
            if isinstance(data, str):
                raise ValueError("Binary format expects bytes, got str")
            return cls._from_binary(bytes(data))
        else:
            raise ValueError(f"Unsupported serialization format: {format}")

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of this summary in bytes.

        This accounts for the base object and its instance dictionary. Derived
        classes should override it to add their own data structures.

        Returns:
            Estimated memory usage in bytes.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        return size

    def check_memory_limit(self) -> bool:
        """
        Check if the current memory usage is within the configured limit.

        Returns:
            True if the memory usage is within limits, False otherwise.
        """
        if self._memory_limit_bytes is None:
            return True

        return self.estimate_size() <= self._memory_limit_bytes

    def clear(self) -> None:
        """
        Reset the summary to its initial empty state.

        Derived classes must override this method to clear their own data
        structures and call super().clear().
        """
        self._items_processed = 0

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the summary.

        Derived classes should override this method to include their specific
        statistics while calling super().get_stats() to include base metrics.

        Returns:
            A dictionary containing various statistics about the summary state.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "items_processed": self._items_processed,
            "memory_bytes": self.estimate_size(),
        }

        if self._memory_limit_bytes is not None:
            stats["memory_limit_bytes"] = self._memory_limit_bytes
            stats["memory_usage_pct"] = (
                self.estimate_size() / self._memory_limit_bytes
            ) * 100

        return stats

    def error_bounds(self) -> Dict[str, Any]:
        """
        Get the error characteristics of this summary.

        The base implementation returns an empty dictionary.
        """
        return {}

    @property
    def items_processed(self) -> int:
        """Get the total number of items processed by this summary."""
        return self._items_processed


class QuantileEstimator(StreamSummary[float, float], abc.ABC):
    """
    Abstract base class for summaries that estimate order statistics.

    Implementations provide quantile() and its inverse rank(); percentiles,
    the median and batch queries are derived from those two.
    """

    #: Quantiles reported by get_stats() when the summary holds data.
    SUMMARY_QUANTILES = (0.5, 0.9, 0.99)

    @abc.abstractmethod
    def quantile(self, q: float) -> float:
        """
        Estimate the value below which a fraction q of the data falls.

        Args:
            q: Target quantile in [0, 1].
        """
        pass

    @abc.abstractmethod
    def rank(self, value: float) -> float:
        """
        Estimate the fraction of the data at or below value.

        Args:
            value: The value to locate.

        Returns:
            A fraction in [0, 1].
        """
        pass

    @property
    @abc.abstractmethod
    def is_empty(self) -> bool:
        """True when the summary holds no data."""
        pass

    def query(self, q: float) -> float:
        """Alias for quantile()."""
        return self.quantile(q)

    def cdf(self, value: float) -> float:
        """Alias for rank()."""
        return self.rank(value)

    def percentile(self, p: float) -> float:
        """
        Estimate the p-th percentile.

        Args:
            p: Percentile in [0, 100].

        Raises:
            ValueError: If p is outside [0, 100].
        """
        if not (0.0 <= p <= 100.0):
            raise ValueError("Percentile must be between 0 and 100")
        return self.quantile(p / 100.0)

    def median(self) -> float:
        """Estimate the median."""
        return self.quantile(0.5)

    def quantiles(self, qs: Iterable[float]) -> List[float]:
        """Estimate several quantiles at once, in the order given."""
        return [self.quantile(q) for q in qs]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current state of the estimator.

        Adds a handful of quantile estimates when the estimator holds data.
        """
        stats = super().get_stats()

        if not self.is_empty:
            for q in self.SUMMARY_QUANTILES:
                stats[f"p{q * 100:g}"] = self.quantile(q)

        return stats
