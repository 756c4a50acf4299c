"""
Example of tracking latency percentiles with tiny-digest.

This example simulates request latencies arriving on several shards, keeps one
digest per shard, merges them, and ships the merged digest through the binary
wire form.
"""

import random

from tiny_digest import TDigest


def simulate_latency(rng: random.Random) -> float:
    """Mostly fast requests with a slow tail."""
    if rng.random() < 0.02:
        return rng.uniform(500.0, 2000.0)
    return rng.lognormvariate(3.0, 0.5)


def demonstrate_single_stream():
    """Estimate percentiles of one stream and compare them with the exact values."""
    print("\n=== Single Stream Demo ===")

    rng = random.Random(42)
    digest = TDigest(compression=100)
    latencies = []

    print("Processing 100000 latencies...")
    for i in range(100000):
        value = simulate_latency(rng)
        latencies.append(value)
        digest.update(value)

        if i % 25000 == 0:
            print(f"  Processed {i} items")

    latencies.sort()
    print(f"\n{'pct':>6} {'estimate':>10} {'exact':>10}")
    for p in (50, 90, 99, 99.9):
        exact = latencies[min(int(p / 100 * len(latencies)), len(latencies) - 1)]
        print(f"{p:>6} {digest.percentile(p):>10.2f} {exact:>10.2f}")

    print(f"\nCentroids kept: {digest.centroid_count}")
    print(f"Approximate memory usage: {digest.estimate_size()} bytes")
    print(f"Share of requests under 100 ms: {digest.rank(100.0):.3f}")


def demonstrate_sharded_merge():
    """Build one digest per shard, merge them and round-trip the result."""
    print("\n=== Sharded Merge Demo ===")

    rng = random.Random(7)
    shards = []
    for shard in range(4):
        digest = TDigest(compression=100)
        digest.update_many(simulate_latency(rng) for _ in range(25000))
        shards.append(digest)
        print(f"  Shard {shard}: p99 = {digest.quantile(0.99):.2f}")

    merged = TDigest.merge_all(shards)
    print(f"\nMerged p50 = {merged.median():.2f}, p99 = {merged.quantile(0.99):.2f}")
    print(f"Merged weight: {merged.total_weight:g}")

    payload = merged.to_bytes()
    print(f"\nBinary size: {len(payload)} bytes")
    restored = TDigest.from_bytes(payload)
    print(f"Restored p99 = {restored.quantile(0.99):.2f}")


if __name__ == "__main__":
    demonstrate_single_stream()
    demonstrate_sharded_merge()
