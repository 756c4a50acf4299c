"""
Scale functions controlling the variable resolution of a t-digest.

A scale function k(q) maps a cumulative quantile position q in [0, 1] onto a
scale where every cluster may span at most one unit. Steep slopes near q = 0
and q = 1 force small clusters (high resolution) at the tails; a shallow slope
near the median lets clusters grow large in the bulk of the distribution.

The four families correspond to k0..k3 of Dunning and Ertl, "Computing
Extremely Accurate Quantiles Using t-Digests" (2019):

- linear:    k = compression * q / 2 (uniform resolution)
- arcsin:    k = compression / (2 pi) * asin(2q - 1) (the default)
- logit:     k = compression / Z * log(q / (1 - q))
- log-tails: k = compression / Z * log(2q) below the median, mirrored above

The logit and log-tails families use a normaliser Z that grows slowly with the
total weight n so that the centroid count stays proportional to compression.
"""

import abc
import math
from typing import Dict, Union

# Quantiles are clamped this far away from 0 and 1 before taking logarithms.
_EPSILON = 1e-15
# Largest argument handed to math.exp.
_MAX_EXPONENT = 700.0


def _clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


class ScaleFunction(abc.ABC):
    """
    Strategy mapping quantile positions to cluster-size budgets.

    Implementations are stateless; two instances of the same family compare
    equal, which is what merge compatibility is checked against.
    """

    name: str = ""

    @abc.abstractmethod
    def k(self, q: float, compression: float, n: float) -> float:
        """
        Map quantile q onto the k scale.

        Args:
            q: Cumulative quantile position, clamped into [0, 1].
            compression: The digest's compression parameter.
            n: Total weight of the data being clustered.
        """
        pass

    @abc.abstractmethod
    def q(self, k: float, compression: float, n: float) -> float:
        """Inverse of k(); always returns a value in [0, 1]."""
        pass

    def max_weight(self, q: float, compression: float, n: float) -> float:
        """
        Largest weight a cluster starting at quantile q may accumulate.

        This is the weight spanned between q and the quantile one unit further
        along the k scale.
        """
        limit = self.q(self.k(q, compression, n) + 1.0, compression, n)
        return n * max(0.0, limit - q)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScaleFunction):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class LinearScale(ScaleFunction):
    """Uniform resolution across all quantiles (k0)."""

    name = "linear"

    def k(self, q: float, compression: float, n: float) -> float:
        return compression * _clamp(q, 0.0, 1.0) / 2.0

    def q(self, k: float, compression: float, n: float) -> float:
        return _clamp(2.0 * k / compression, 0.0, 1.0)


class ArcsineScale(ScaleFunction):
    """Arcsine scale (k1), the standard t-digest choice."""

    name = "arcsin"

    def k(self, q: float, compression: float, n: float) -> float:
        q = _clamp(q, 0.0, 1.0)
        return compression / (2.0 * math.pi) * math.asin(2.0 * q - 1.0)

    def q(self, k: float, compression: float, n: float) -> float:
        # sin() wraps outside [-pi/2, pi/2], so k is held to its valid range.
        bound = compression / 4.0
        k = _clamp(k, -bound, bound)
        return (math.sin(k * 2.0 * math.pi / compression) + 1.0) / 2.0


class LogitScale(ScaleFunction):
    """Logit scale (k2): resolution grows geometrically towards both tails."""

    name = "logit"

    @staticmethod
    def _normalizer(compression: float, n: float) -> float:
        return 4.0 * math.log(max(n / compression, 1.0)) + 24.0

    def k(self, q: float, compression: float, n: float) -> float:
        q = _clamp(q, _EPSILON, 1.0 - _EPSILON)
        z = self._normalizer(compression, n)
        return compression / z * math.log(q / (1.0 - q))

    def q(self, k: float, compression: float, n: float) -> float:
        z = self._normalizer(compression, n)
        x = _clamp(k * z / compression, -_MAX_EXPONENT, _MAX_EXPONENT)
        return 1.0 / (1.0 + math.exp(-x))


class TailLogScale(ScaleFunction):
    """Logarithmic tails (k3): like logit, with a flatter middle."""

    name = "log-tails"

    @staticmethod
    def _normalizer(compression: float, n: float) -> float:
        return 4.0 * math.log(max(n / compression, 1.0)) + 21.0

    def k(self, q: float, compression: float, n: float) -> float:
        q = _clamp(q, _EPSILON, 1.0 - _EPSILON)
        factor = compression / self._normalizer(compression, n)
        if q <= 0.5:
            return factor * math.log(2.0 * q)
        return -factor * math.log(2.0 * (1.0 - q))

    def q(self, k: float, compression: float, n: float) -> float:
        z = self._normalizer(compression, n)
        x = _clamp(k * z / compression, -_MAX_EXPONENT, _MAX_EXPONENT)
        if x <= 0:
            return math.exp(x) / 2.0
        return 1.0 - math.exp(-x) / 2.0


SCALE_FUNCTIONS: Dict[str, ScaleFunction] = {
    scale.name: scale
    for scale in (LinearScale(), ArcsineScale(), LogitScale(), TailLogScale())
}

DEFAULT_SCALE = "arcsin"


def get_scale_function(scale: Union[str, ScaleFunction]) -> ScaleFunction:
    """
    Resolve a scale function by name, or pass an instance through.

    Raises:
        ValueError: If the name is not registered.
        TypeError: If scale is neither a string nor a ScaleFunction.
    """
    if isinstance(scale, ScaleFunction):
        return scale
    if not isinstance(scale, str):
        raise TypeError(
            f"Scale must be a name or ScaleFunction, got {type(scale).__name__}"
        )
    try:
        return SCALE_FUNCTIONS[scale]
    except KeyError:
        raise ValueError(
            f"Unknown scale function '{scale}'. "
            f"Available: {', '.join(sorted(SCALE_FUNCTIONS))}"
        ) from None
