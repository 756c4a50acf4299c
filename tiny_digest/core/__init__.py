"""
Core functionality for tiny-digest.
"""

from tiny_digest.core.base import QuantileEstimator, StreamSummary
from tiny_digest.core.exceptions import (
    EmptyDigestError,
    IncompatibleDigestError,
    InvalidValueError,
    TinyDigestError,
)

__all__ = [
    # Base classes
    "StreamSummary",
    "QuantileEstimator",
    # Errors
    "TinyDigestError",
    "InvalidValueError",
    "EmptyDigestError",
    "IncompatibleDigestError",
]
