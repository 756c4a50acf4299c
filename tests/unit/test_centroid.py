"""
Unit tests for centroids and the centroid store.
"""

import unittest

from tiny_digest.algorithms.centroid import Centroid, CentroidStore, absorb


class TestCentroid(unittest.TestCase):
    """Tests for the Centroid value type."""

    def test_init(self):
        c = Centroid(mean=10.0, weight=5.0)
        self.assertEqual(c.mean, 10.0)
        self.assertEqual(c.weight, 5.0)

    def test_default_weight(self):
        self.assertEqual(Centroid(3).weight, 1.0)

    def test_init_invalid_weight(self):
        for weight in (0.0, 0.5, -1.0, float("nan"), float("inf")):
            with self.assertRaises(ValueError, msg=f"weight={weight}"):
                Centroid(mean=10.0, weight=weight)

    def test_init_invalid_mean(self):
        for mean in (float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(ValueError, msg=f"mean={mean}"):
                Centroid(mean=mean)

    def test_immutable(self):
        c = Centroid(1.0, 2.0)
        with self.assertRaises(AttributeError):
            c.mean = 5.0

    def test_lt(self):
        c1 = Centroid(mean=5.0, weight=1.0)
        c2 = Centroid(mean=10.0, weight=1.0)
        c3 = Centroid(mean=5.0, weight=2.0)  # Same mean as c1
        self.assertTrue(c1 < c2)
        self.assertFalse(c2 < c1)
        self.assertFalse(c1 < c3)  # Comparison only uses the mean
        self.assertFalse(c3 < c1)

    def test_equality(self):
        self.assertEqual(Centroid(1.0, 2.0), Centroid(1.0, 2.0))
        self.assertNotEqual(Centroid(1.0, 2.0), Centroid(1.0, 3.0))
        self.assertEqual(len({Centroid(1.0, 2.0), Centroid(1.0, 2.0)}), 1)

    def test_repr(self):
        c = Centroid(mean=12.3456, weight=7.89)
        self.assertEqual(repr(c), "Centroid(mean=12.35, weight=7.89)")

    def test_serialization(self):
        c1 = Centroid(mean=25.5, weight=2.0)
        data = c1.to_dict()
        self.assertEqual(data, {"mean": 25.5, "weight": 2.0})
        self.assertEqual(Centroid.from_dict(data), c1)

    def test_deserialization_invalid(self):
        with self.assertRaises(ValueError):
            Centroid.from_dict({"mean": 10})  # Missing weight
        with self.assertRaises(ValueError):
            Centroid.from_dict({"weight": 5})  # Missing mean
        with self.assertRaises(ValueError):
            Centroid.from_dict({"mean": 10, "weight": -2.0})


class TestAbsorb(unittest.TestCase):
    """Tests for combining two weighted points."""

    def test_weighted_mean(self):
        mean, weight = absorb(0.0, 1.0, 10.0, 3.0)
        self.assertEqual(weight, 4.0)
        self.assertAlmostEqual(mean, 7.5)

    def test_equal_means_are_exact(self):
        self.assertEqual(absorb(0.1, 7.0, 0.1, 3.0), (0.1, 10.0))

    def test_result_stays_between_inputs(self):
        low, high = 0.1, 0.1 + 1e-15
        for w in (1.0, 3.0, 1e6):
            mean, _ = absorb(low, w, high, 1.0)
            self.assertGreaterEqual(mean, low)
            self.assertLessEqual(mean, high)


class TestCentroidStore(unittest.TestCase):
    """Tests for the contiguous centroid store."""

    def test_empty(self):
        store = CentroidStore()
        self.assertEqual(len(store), 0)
        self.assertFalse(store)
        self.assertEqual(store.total_weight, 0.0)
        self.assertEqual(store.pairs(), [])
        self.assertTrue(store.is_sorted())

    def test_append_and_access(self):
        store = CentroidStore()
        store.append(1.0, 2.0)
        store.append(3.0, 4.0)

        self.assertEqual(len(store), 2)
        self.assertEqual(store.total_weight, 6.0)
        self.assertEqual(store.means, (1.0, 3.0))
        self.assertEqual(store.weights, (2.0, 4.0))
        self.assertEqual(store.mean_at(1), 3.0)
        self.assertEqual(store.weight_at(0), 2.0)
        self.assertEqual(store[1], Centroid(3.0, 4.0))
        self.assertEqual(list(store), [Centroid(1.0, 2.0), Centroid(3.0, 4.0)])

    def test_from_pairs_validates(self):
        store = CentroidStore.from_pairs([(1.0, 1.0), (2.0, 5.0)])
        self.assertEqual(store.pairs(), [(1.0, 1.0), (2.0, 5.0)])

        with self.assertRaises(ValueError):
            CentroidStore.from_pairs([(1.0, 0.0)])
        with self.assertRaises(ValueError):
            CentroidStore.from_pairs([(float("nan"), 1.0)])

    def test_is_sorted(self):
        self.assertTrue(CentroidStore.from_pairs([(1, 1), (1, 1), (2, 1)]).is_sorted())
        self.assertFalse(CentroidStore.from_pairs([(2, 1), (1, 1)]).is_sorted())

    def test_copy_is_independent(self):
        store = CentroidStore.from_pairs([(1.0, 1.0)])
        clone = store.copy()
        clone.append(2.0, 1.0)

        self.assertEqual(len(store), 1)
        self.assertEqual(store.total_weight, 1.0)
        self.assertEqual(len(clone), 2)
        self.assertEqual(clone.total_weight, 2.0)

    def test_estimate_size_grows(self):
        store = CentroidStore()
        empty_size = store.estimate_size()
        for i in range(1000):
            store.append(float(i), 1.0)
        self.assertGreater(store.estimate_size(), empty_size)

    def test_repr(self):
        store = CentroidStore.from_pairs([(1.0, 2.0)])
        self.assertEqual(repr(store), "CentroidStore(size=1, total_weight=2)")


if __name__ == "__main__":
    unittest.main()
