"""
Unit tests for the compression engine.
"""

import random
import unittest

from tiny_digest.algorithms.compression import compress
from tiny_digest.algorithms.scale import SCALE_FUNCTIONS, ArcsineScale, LinearScale


def weighted_mean(pairs):
    total = sum(w for _, w in pairs)
    return sum(m * w for m, w in pairs) / total


class TestCompress(unittest.TestCase):
    """Tests for compress()."""

    def setUp(self):
        self.rng = random.Random(1234)
        self.scale = ArcsineScale()

    def test_empty_input(self):
        store = compress([], [], 100, self.scale)
        self.assertEqual(len(store), 0)
        self.assertEqual(store.total_weight, 0.0)

    def test_single_value(self):
        store = compress([], [4.2], 100, self.scale)
        self.assertEqual(store.pairs(), [(4.2, 1.0)])

    def test_mass_is_conserved(self):
        values = [self.rng.gauss(0, 1) for _ in range(5000)]
        store = compress([], values, 100, self.scale)
        self.assertEqual(store.total_weight, 5000.0)
        self.assertEqual(sum(store.weights), 5000.0)

    def test_output_is_sorted(self):
        for name, scale in SCALE_FUNCTIONS.items():
            values = [self.rng.expovariate(1.0) for _ in range(3000)]
            store = compress([], values, 50, scale)
            self.assertTrue(store.is_sorted(), msg=name)

    def test_weighted_mean_is_preserved(self):
        existing = compress(
            [], [self.rng.uniform(0, 10) for _ in range(2000)], 100, self.scale
        ).pairs()
        buffered = [self.rng.uniform(5, 20) for _ in range(700)]

        before = weighted_mean(existing + [(v, 1.0) for v in buffered])
        store = compress(existing, buffered, 100, self.scale)

        self.assertAlmostEqual(weighted_mean(store.pairs()), before, places=9)
        self.assertEqual(
            store.total_weight, sum(w for _, w in existing) + len(buffered)
        )

    def test_inputs_are_not_modified(self):
        existing = [(1.0, 3.0), (5.0, 2.0)]
        buffered = [9.0, 0.5, 3.0]
        compress(existing, buffered, 20, self.scale)
        self.assertEqual(existing, [(1.0, 3.0), (5.0, 2.0)])
        self.assertEqual(buffered, [9.0, 0.5, 3.0])

    def test_equal_values(self):
        store = compress([], [0.1] * 1000, 100, self.scale)
        self.assertTrue(store.is_sorted())
        self.assertEqual(store.total_weight, 1000.0)
        for mean in store.means:
            self.assertEqual(mean, 0.1)

    def test_centroid_count_is_bounded(self):
        values = [self.rng.random() for _ in range(10000)]
        for compression in (20, 50, 100):
            store = compress([], values, compression, self.scale)
            self.assertLessEqual(len(store), compression + 2)
            self.assertGreater(len(store), 1)

    def test_tail_clusters_are_small(self):
        values = [self.rng.random() for _ in range(10000)]
        store = compress([], values, 100, self.scale)
        weights = store.weights
        self.assertLess(weights[0], max(weights))
        self.assertLess(weights[-1], max(weights))

    def test_extremes_stay_singletons(self):
        values = [self.rng.random() for _ in range(5000)]
        store = compress([], values, 100, self.scale)
        self.assertEqual(store.pairs()[0], (min(values), 1.0))
        self.assertEqual(store.pairs()[-1], (max(values), 1.0))

        more = [self.rng.uniform(-1, 2) for _ in range(500)]
        store = compress(store.pairs(), more, 100, self.scale)
        self.assertEqual(store.pairs()[0], (min(values + more), 1.0))
        self.assertEqual(store.pairs()[-1], (max(values + more), 1.0))
        self.assertEqual(store.total_weight, 5500.0)

    def test_two_points(self):
        store = compress([], [3.0, 1.0], 100, self.scale)
        self.assertEqual(store.pairs(), [(1.0, 1.0), (3.0, 1.0)])

    def test_linear_clusters_respect_uniform_bound(self):
        values = [self.rng.random() for _ in range(10000)]
        store = compress([], values, 100, LinearScale())
        # Each cluster may hold at most 2n / compression
        for weight in store.weights:
            self.assertLessEqual(weight, 200.0)

    def test_heavy_centroid_is_never_split(self):
        store = compress([(0.0, 1.0), (1.0, 1000.0), (2.0, 1.0)], [], 10, self.scale)
        self.assertEqual(store.pairs(), [(0.0, 1.0), (1.0, 1000.0), (2.0, 1.0)])

    def test_is_deterministic(self):
        values = [self.rng.choice([1.0, 2.0, 3.0]) for _ in range(500)]
        existing = [(2.0, 10.0), (1.0, 4.0)]
        first = compress(existing, values, 30, self.scale).pairs()
        second = compress(existing, values, 30, self.scale).pairs()
        self.assertEqual(first, second)

    def test_few_points_stay_exact(self):
        store = compress([], [float(v) for v in range(10, 0, -1)], 20, self.scale)
        self.assertEqual(store.means, tuple(float(v) for v in range(1, 11)))

    def test_logs_at_debug(self):
        with self.assertLogs("tiny_digest.algorithms.compression", level="DEBUG") as cm:
            compress([], [1.0, 2.0], 100, self.scale)
        self.assertIn("Compressed 2 points", cm.output[0])


if __name__ == "__main__":
    unittest.main()
