"""Tests for simdbench.bench.compare: baseline vs. variant comparison."""

from __future__ import annotations

import math
import unittest

from bench_test_helpers import make_summary

from simdbench.bench.compare import compare
from simdbench.bench.results import Comparison
from simdbench.bench.stats import BYTES_PER_MB


class TestCompare(unittest.TestCase):
    """Tests for compare()."""

    def test_end_to_end_scenario(self) -> None:
        baseline = make_summary("Non-SIMD Version", mean=100.0)
        variant = make_summary("SIMD Version", mean=50.0, simd_enabled=True)
        self.assertAlmostEqual(baseline.throughput_mbps, 100.0)
        self.assertAlmostEqual(variant.throughput_mbps, 200.0)

        comp = compare(baseline, variant)
        self.assertIsInstance(comp, Comparison)
        self.assertAlmostEqual(comp.speedup, 2.0)
        self.assertAlmostEqual(comp.throughput_gain_pct, 100.0)
        self.assertAlmostEqual(comp.time_saved_ms, 50.0)
        self.assertEqual(comp.baseline_name, "Non-SIMD Version")
        self.assertEqual(comp.variant_name, "SIMD Version")
        self.assertFalse(comp.is_regression)

    def test_speedup_symmetry(self) -> None:
        for mean_a, mean_b in [(100.0, 50.0), (3.3, 7.9), (12.0, 12.0)]:
            a = make_summary("A", mean=mean_a)
            b = make_summary("B", mean=mean_b)
            self.assertAlmostEqual(compare(a, b).speedup, 1 / compare(b, a).speedup)

    def test_regression(self) -> None:
        baseline = make_summary("base", mean=40.0)
        variant = make_summary("slow", mean=60.0)
        comp = compare(baseline, variant)
        self.assertLess(comp.speedup, 1)
        self.assertLess(comp.time_saved_ms, 0)
        self.assertLess(comp.throughput_gain_pct, 0)
        self.assertTrue(comp.is_regression)

    def test_identical_summaries(self) -> None:
        s = make_summary(mean=25.0)
        comp = compare(s, s)
        self.assertAlmostEqual(comp.speedup, 1.0)
        self.assertAlmostEqual(comp.throughput_gain_pct, 0.0)
        self.assertEqual(comp.time_saved_ms, 0.0)

    def test_gain_uses_throughput_not_mean(self) -> None:
        """Different output sizes change the gain but not the speedup."""
        baseline = make_summary("base", mean=100.0, decompressed_size=10 * BYTES_PER_MB)
        variant = make_summary("var", mean=100.0, decompressed_size=15 * BYTES_PER_MB)
        comp = compare(baseline, variant)
        self.assertAlmostEqual(comp.speedup, 1.0)
        self.assertAlmostEqual(comp.throughput_gain_pct, 50.0)

    def test_zero_variant_mean_does_not_raise(self) -> None:
        baseline = make_summary("base", mean=10.0)
        variant = make_summary("var", mean=0.0)
        comp = compare(baseline, variant)
        self.assertEqual(comp.speedup, math.inf)
        self.assertEqual(comp.throughput_gain_pct, math.inf)

    def test_both_zero_means(self) -> None:
        s = make_summary(mean=0.0)
        comp = compare(s, s)
        self.assertTrue(math.isnan(comp.speedup))
        self.assertTrue(math.isnan(comp.throughput_gain_pct))
        self.assertEqual(comp.time_saved_ms, 0.0)

    def test_argument_order_matters(self) -> None:
        a = make_summary("A", mean=80.0)
        b = make_summary("B", mean=20.0)
        self.assertAlmostEqual(compare(a, b).time_saved_ms, 60.0)
        self.assertAlmostEqual(compare(b, a).time_saved_ms, -60.0)


if __name__ == "__main__":
    unittest.main()
