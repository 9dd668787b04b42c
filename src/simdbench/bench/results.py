"""Benchmark result data structures and serialization.

Hierarchy::

    BenchReport (one complete run: baseline vs. SIMD)
      → baseline: Summary
      → variant: Summary
      → comparison: Comparison

    RawSample (one timed trial) is consumed by the aggregator and
    never stored in a Summary.

All records are frozen: they are computed once, reported, and thrown
away.  Nothing here is persisted between runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def _finite_or_none(value: float, ndigits: int = 6) -> float | None:
    """Round a float for JSON output; ``inf``/``nan`` become ``None``."""
    if math.isnan(value) or math.isinf(value):
        return None
    return round(value, ndigits)


# ---------------------------------------------------------------------------
# Trial-level sample
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawSample:
    """Measurement of a single timed call to ``decompress_once``."""

    elapsed_ms: float
    bytes_produced: int


# ---------------------------------------------------------------------------
# Variant-level summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Summary:
    """Summary statistics for one module variant."""

    name: str
    simd_enabled: bool
    compressed_size: int  # bytes
    decompressed_size: float  # mean bytes produced per trial
    iterations: int
    min: float  # ms
    max: float  # ms
    mean: float  # ms
    median: float  # ms
    throughput_mbps: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.name,
            "simd_enabled": self.simd_enabled,
            "compressed_size": self.compressed_size,
            "decompressed_size": _finite_or_none(self.decompressed_size, 1),
            "iterations": self.iterations,
            "min_ms": _finite_or_none(self.min),
            "max_ms": _finite_or_none(self.max),
            "mean_ms": _finite_or_none(self.mean),
            "median_ms": _finite_or_none(self.median),
            "throughput_mbps": _finite_or_none(self.throughput_mbps),
        }


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Comparison:
    """Relative performance of a variant against a baseline."""

    baseline_name: str
    variant_name: str
    speedup: float  # baseline.mean / variant.mean
    throughput_gain_pct: float
    time_saved_ms: float  # negative when the variant is slower

    @property
    def is_regression(self) -> bool:
        """True if the variant was slower than the baseline."""
        return self.time_saved_ms < 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "baseline": self.baseline_name,
            "variant": self.variant_name,
            "speedup": _finite_or_none(self.speedup),
            "throughput_gain_pct": _finite_or_none(self.throughput_gain_pct),
            "time_saved_ms": _finite_or_none(self.time_saved_ms),
        }


# ---------------------------------------------------------------------------
# Complete run
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchReport:
    """Both summaries of a run and the comparison between them."""

    baseline: Summary
    variant: Summary
    comparison: Comparison
    warmup: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "warmup": self.warmup,
            "baseline": self.baseline.to_dict(),
            "variant": self.variant.to_dict(),
            "comparison": self.comparison.to_dict(),
        }
