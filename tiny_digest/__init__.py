"""
tiny-digest - Mergeable streaming quantile estimation

tiny-digest estimates percentiles, medians and arbitrary quantiles over data
streams in bounded memory using a t-digest. Digests built on separate nodes can
be serialized, shipped and merged into one.
"""

import logging

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from tiny_digest.algorithms.scale import (
    ArcsineScale,
    LinearScale,
    LogitScale,
    ScaleFunction,
    TailLogScale,
    get_scale_function,
)
from tiny_digest.algorithms.tdigest import TDigest, create, merge
from tiny_digest.core.base import QuantileEstimator, StreamSummary
from tiny_digest.core.exceptions import (
    EmptyDigestError,
    IncompatibleDigestError,
    InvalidValueError,
    TinyDigestError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core base classes
    "StreamSummary",
    "QuantileEstimator",
    # Errors
    "TinyDigestError",
    "InvalidValueError",
    "EmptyDigestError",
    "IncompatibleDigestError",
    # Scale functions
    "ScaleFunction",
    "LinearScale",
    "ArcsineScale",
    "LogitScale",
    "TailLogScale",
    "get_scale_function",
    # Digest
    "TDigest",
    "create",
    "merge",
]
