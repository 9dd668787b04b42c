"""Comparison of two variant summaries.

The baseline is always the reference denominator, so argument order
matters: ``compare(a, b).speedup == 1 / compare(b, a).speedup``.
"""

from __future__ import annotations

import math

from simdbench.bench.results import Comparison, Summary


def _ratio(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics instead of raising on zero."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def compare(baseline: Summary, variant: Summary) -> Comparison:
    """Compare *variant* against *baseline*.

    A variant slower than the baseline is a valid outcome: it yields a
    speedup below 1 and a negative ``time_saved_ms``.
    """
    speedup = _ratio(baseline.mean, variant.mean)
    gain = (_ratio(variant.throughput_mbps, baseline.throughput_mbps) - 1) * 100

    return Comparison(
        baseline_name=baseline.name,
        variant_name=variant.name,
        speedup=speedup,
        throughput_gain_pct=gain,
        time_saved_ms=baseline.mean - variant.mean,
    )
