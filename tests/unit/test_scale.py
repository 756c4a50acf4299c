"""
Unit tests for the scale functions.
"""

import math
import unittest

from tiny_digest.algorithms.scale import (
    SCALE_FUNCTIONS,
    ArcsineScale,
    LinearScale,
    LogitScale,
    ScaleFunction,
    TailLogScale,
    get_scale_function,
)

COMPRESSION = 100.0
N = 10000.0


class TestScaleFunctions(unittest.TestCase):
    """Properties shared by every scale function family."""

    def test_registry(self):
        self.assertEqual(
            set(SCALE_FUNCTIONS), {"linear", "arcsin", "logit", "log-tails"}
        )

    def test_k_is_monotonic(self):
        grid = [i / 1000.0 for i in range(1001)]
        for name, scale in SCALE_FUNCTIONS.items():
            values = [scale.k(q, COMPRESSION, N) for q in grid]
            for a, b in zip(values, values[1:]):
                self.assertLessEqual(a, b, msg=name)

    def test_inverse_round_trip(self):
        for name, scale in SCALE_FUNCTIONS.items():
            for q in (0.001, 0.01, 0.1, 0.3, 0.5, 0.7, 0.9, 0.99, 0.999):
                k = scale.k(q, COMPRESSION, N)
                self.assertAlmostEqual(
                    scale.q(k, COMPRESSION, N), q, places=9, msg=f"{name} q={q}"
                )

    def test_inverse_stays_in_unit_interval(self):
        for name, scale in SCALE_FUNCTIONS.items():
            for k in (-1e9, -1e3, -1.0, 0.0, 1.0, 1e3, 1e9):
                q = scale.q(k, COMPRESSION, N)
                self.assertGreaterEqual(q, 0.0, msg=name)
                self.assertLessEqual(q, 1.0, msg=name)

    def test_boundaries_do_not_raise(self):
        for name, scale in SCALE_FUNCTIONS.items():
            for q in (0.0, 1.0, -0.5, 1.5):
                self.assertTrue(math.isfinite(scale.k(q, COMPRESSION, N)), msg=name)
                self.assertGreaterEqual(scale.max_weight(q, COMPRESSION, N), 0.0)

    def test_tails_get_smaller_clusters(self):
        for scale in (ArcsineScale(), LogitScale(), TailLogScale()):
            middle = scale.max_weight(0.5, COMPRESSION, N)
            for q in (0.01, 0.99):
                self.assertLess(
                    scale.max_weight(q, COMPRESSION, N), middle, msg=scale.name
                )

    def test_more_compression_means_smaller_clusters(self):
        for name, scale in SCALE_FUNCTIONS.items():
            self.assertLess(
                scale.max_weight(0.3, 200.0, N),
                scale.max_weight(0.3, 50.0, N),
                msg=name,
            )


class TestIndividualScales(unittest.TestCase):
    """Closed-form checks of each family."""

    def test_linear_is_uniform(self):
        scale = LinearScale()
        expected = 2.0 * N / COMPRESSION
        for q in (0.1, 0.2, 0.5, 0.7):
            self.assertAlmostEqual(scale.max_weight(q, COMPRESSION, N), expected)

    def test_arcsin_range(self):
        scale = ArcsineScale()
        self.assertAlmostEqual(scale.k(0.0, COMPRESSION, N), -COMPRESSION / 4)
        self.assertAlmostEqual(scale.k(0.5, COMPRESSION, N), 0.0)
        self.assertAlmostEqual(scale.k(1.0, COMPRESSION, N), COMPRESSION / 4)

    def test_arcsin_inverse_does_not_wrap(self):
        scale = ArcsineScale()
        self.assertEqual(scale.q(COMPRESSION, COMPRESSION, N), 1.0)
        self.assertEqual(scale.q(-COMPRESSION, COMPRESSION, N), 0.0)
        self.assertEqual(scale.max_weight(1.0, COMPRESSION, N), 0.0)

    def test_arcsin_median_budget(self):
        # One unit of k around the median covers sin(2 pi / compression) / 2
        scale = ArcsineScale()
        expected = N * math.sin(2 * math.pi / COMPRESSION) / 2
        self.assertAlmostEqual(scale.max_weight(0.5, COMPRESSION, N), expected)

    def test_logit_is_symmetric(self):
        scale = LogitScale()
        self.assertAlmostEqual(
            scale.k(0.2, COMPRESSION, N), -scale.k(0.8, COMPRESSION, N)
        )

    def test_log_tails_is_symmetric(self):
        scale = TailLogScale()
        self.assertAlmostEqual(scale.k(0.5, COMPRESSION, N), 0.0)
        self.assertAlmostEqual(
            scale.k(0.1, COMPRESSION, N), -scale.k(0.9, COMPRESSION, N)
        )

    def test_small_stream_normaliser(self):
        # n far below compression must not flip the sign of the normaliser
        for scale in (LogitScale(), TailLogScale()):
            self.assertLess(scale.k(0.1, 1000.0, 1.0), 0.0)
            self.assertGreater(scale.k(0.9, 1000.0, 1.0), 0.0)


class TestScaleLookup(unittest.TestCase):
    """Tests for get_scale_function and scale equality."""

    def test_lookup_by_name(self):
        self.assertIsInstance(get_scale_function("arcsin"), ArcsineScale)
        self.assertIsInstance(get_scale_function("linear"), LinearScale)
        self.assertIsInstance(get_scale_function("logit"), LogitScale)
        self.assertIsInstance(get_scale_function("log-tails"), TailLogScale)

    def test_instance_passes_through(self):
        scale = LogitScale()
        self.assertIs(get_scale_function(scale), scale)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            get_scale_function("cubic")

    def test_wrong_type(self):
        with self.assertRaises(TypeError):
            get_scale_function(42)

    def test_equality_by_family(self):
        self.assertEqual(ArcsineScale(), ArcsineScale())
        self.assertNotEqual(ArcsineScale(), LinearScale())
        self.assertEqual(hash(LogitScale()), hash(LogitScale()))
        self.assertNotEqual(ArcsineScale(), "arcsin")

    def test_abstract(self):
        with self.assertRaises(TypeError):
            ScaleFunction()

    def test_repr(self):
        self.assertEqual(repr(ArcsineScale()), "ArcsineScale()")


if __name__ == "__main__":
    unittest.main()
