"""
Versioned binary wire form for digests.

Layout (big-endian), version 1:

    magic            4s   b"TDGT"
    version          u8
    scale name len   u8
    scale name       ascii
    compression      f64
    buffer capacity  u32
    min              f64  (NaN when empty)
    max              f64  (NaN when empty)
    centroid count   u32
    centroids        (mean f64, weight f64) * count

Only compressed state travels: a digest flushes its buffer before encoding.
"""

import logging
import math
import struct
from typing import List, NamedTuple, Optional, Tuple

from tiny_digest.core.exceptions import IncompatibleDigestError

logger = logging.getLogger(__name__)

MAGIC = b"TDGT"
VERSION = 1

_PREFIX = struct.Struct(">4sBB")
_BODY = struct.Struct(">dIddI")
_PAIR = struct.Struct(">dd")


class DigestState(NamedTuple):
    """Plain snapshot of everything the wire form carries."""

    scale: str
    compression: float
    buffer_capacity: int
    min_val: Optional[float]
    max_val: Optional[float]
    centroids: List[Tuple[float, float]]


def validate_centroids(centroids: List[Tuple[float, float]]) -> None:
    """
    Check the centroid invariants: finite means in ascending order, weights >= 1.

    Raises:
        IncompatibleDigestError: On the first violated invariant.
    """
    previous = -math.inf
    for index, (mean, weight) in enumerate(centroids):
        if not math.isfinite(mean):
            raise IncompatibleDigestError(
                f"Centroid {index} has non-finite mean {mean}"
            )
        if not (math.isfinite(weight) and weight >= 1.0):
            raise IncompatibleDigestError(
                f"Centroid {index} has invalid weight {weight}"
            )
        if mean < previous:
            raise IncompatibleDigestError(
                f"Centroid {index} is out of order ({mean} < {previous})"
            )
        previous = mean


def encode(state: DigestState) -> bytes:
    """Encode a digest snapshot into the version 1 wire form."""
    name = state.scale.encode("ascii")
    if len(name) > 255:
        raise ValueError("Scale function name too long for the wire form")

    parts = [
        _PREFIX.pack(MAGIC, VERSION, len(name)),
        name,
        _BODY.pack(
            float(state.compression),
            state.buffer_capacity,
            math.nan if state.min_val is None else state.min_val,
            math.nan if state.max_val is None else state.max_val,
            len(state.centroids),
        ),
    ]
    parts.extend(_PAIR.pack(mean, weight) for mean, weight in state.centroids)
    return b"".join(parts)


def decode(data: bytes) -> DigestState:
    """
    Decode and validate a wire-form digest.

    Raises:
        IncompatibleDigestError: If the bytes are not a valid version 1 digest.
    """
    try:
        state = _decode(data)
        validate_centroids(state.centroids)
    except IncompatibleDigestError as e:
        logger.warning("Rejected serialized digest: %s", e)
        raise
    logger.debug(
        "Decoded digest with %d centroids (%d bytes)", len(state.centroids), len(data)
    )
    return state


def _decode(data: bytes) -> DigestState:
    view = memoryview(data)
    try:
        magic, version, name_len = _PREFIX.unpack_from(view, 0)
    except struct.error as e:
        raise IncompatibleDigestError(f"Truncated digest header: {e}") from e

    if magic != MAGIC:
        raise IncompatibleDigestError(f"Bad magic {magic!r}, expected {MAGIC!r}")
    if version != VERSION:
        raise IncompatibleDigestError(f"Unsupported wire version {version}")

    offset = _PREFIX.size
    try:
        name = bytes(view[offset : offset + name_len]).decode("ascii")
        if len(name) != name_len:
            raise IncompatibleDigestError("Truncated scale function name")
        offset += name_len

        compression, capacity, min_val, max_val, count = _BODY.unpack_from(
            view, offset
        )
        offset += _BODY.size

        expected = offset + count * _PAIR.size
        if len(data) != expected:
            raise IncompatibleDigestError(
                f"Expected {expected} bytes for {count} centroids, got {len(data)}"
            )
        centroids = [
            _PAIR.unpack_from(view, offset + i * _PAIR.size) for i in range(count)
        ]
    except (struct.error, UnicodeDecodeError) as e:
        raise IncompatibleDigestError(f"Malformed digest payload: {e}") from e

    if not (math.isfinite(compression) and compression > 0):
        raise IncompatibleDigestError(f"Invalid compression {compression}")
    if capacity < 1:
        raise IncompatibleDigestError(f"Invalid buffer capacity {capacity}")

    return DigestState(
        scale=name,
        compression=compression,
        buffer_capacity=capacity,
        min_val=None if math.isnan(min_val) else min_val,
        max_val=None if math.isnan(max_val) else max_val,
        centroids=centroids,
    )
