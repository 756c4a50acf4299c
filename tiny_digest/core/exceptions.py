"""
Exception hierarchy for tiny-digest.

Every error raised on purpose by the library derives from TinyDigestError.
The concrete errors also derive from ValueError, so code written against the
plain ValueError contract keeps working.
"""


class TinyDigestError(Exception):
    """Base class for all tiny-digest errors."""


class InvalidValueError(TinyDigestError, ValueError):
    """Raised when a non-finite or non-numeric value is added to a digest."""


class EmptyDigestError(TinyDigestError, ValueError):
    """
    Raised when a digest with zero total weight is queried.

    An empty digest has no defined quantiles; returning 0.0 would be
    indistinguishable from a real estimate of zero.
    """


class IncompatibleDigestError(TinyDigestError, ValueError):
    """
    Raised when two digests cannot be combined, or when serialized digest
    state violates the centroid invariants.
    """
