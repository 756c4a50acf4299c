"""
Algorithm implementations for tiny-digest.
"""

from tiny_digest.algorithms.centroid import Centroid, CentroidStore
from tiny_digest.algorithms.compression import compress
from tiny_digest.algorithms.scale import (
    ArcsineScale,
    LinearScale,
    LogitScale,
    ScaleFunction,
    TailLogScale,
    get_scale_function,
)
from tiny_digest.algorithms.tdigest import TDigest, create, merge

__all__ = [
    "Centroid",
    "CentroidStore",
    "compress",
    "ScaleFunction",
    "LinearScale",
    "ArcsineScale",
    "LogitScale",
    "TailLogScale",
    "get_scale_function",
    "TDigest",
    "create",
    "merge",
]
