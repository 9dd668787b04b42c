"""Terminal display formatting for benchmark results.

Each section is a 60-column ``=`` rule, a title, another rule, then
aligned ``label: value`` lines.  Times and percentages use two
decimals.  No external dependencies.
"""

from __future__ import annotations

import math

from simdbench.bench.results import BenchReport, Comparison, Summary
from simdbench.bench.stats import BYTES_PER_MB

RULE_WIDTH = 60
_LABEL_WIDTH = 19
_COMPARISON_LABEL_WIDTH = 22


# ---------------------------------------------------------------------------
# Value formatting utilities
# ---------------------------------------------------------------------------


def format_number(value: float, precision: int = 2) -> str:
    """Format a float, rendering NaN as N/A."""
    if math.isnan(value):
        return "N/A"
    return f"{value:.{precision}f}"


def format_pct(value: float, precision: int = 2) -> str:
    """Format a percentage with sign."""
    if math.isnan(value):
        return "N/A"
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{precision}f}%"


def _format_kb(size_bytes: float) -> str:
    return f"{format_number(size_bytes / 1024)} KB"


def _format_mb(size_bytes: float) -> str:
    return f"{format_number(size_bytes / BYTES_PER_MB)} MB"


def _section(title: str) -> list[str]:
    rule = "=" * RULE_WIDTH
    return ["", rule, title, rule]


def _field(label: str, value: str, width: int = _LABEL_WIDTH) -> str:
    return f"  {label + ':':<{width}}{value}"


# ---------------------------------------------------------------------------
# Report sections
# ---------------------------------------------------------------------------


def format_header() -> str:
    """Title printed before any benchmark output."""
    title = "WASM Decompression Benchmark"
    return f"{title}\n{'=' * len(title)}"


def format_summary(summary: Summary) -> str:
    """Format one variant's Summary."""
    lines = _section(summary.name)
    lines.extend(
        [
            _field("SIMD Enabled", str(summary.simd_enabled).lower()),
            _field("Compressed Size", _format_kb(summary.compressed_size)),
            _field("Decompressed Size", _format_mb(summary.decompressed_size)),
            _field("Iterations", str(summary.iterations)),
            _field("Time (min)", f"{format_number(summary.min)} ms"),
            _field("Time (max)", f"{format_number(summary.max)} ms"),
            _field("Time (mean)", f"{format_number(summary.mean)} ms"),
            _field("Time (median)", f"{format_number(summary.median)} ms"),
            _field("Throughput", f"{format_number(summary.throughput_mbps)} MB/s"),
        ]
    )
    return "\n".join(lines)


def format_comparison(comparison: Comparison) -> str:
    """Format a Comparison between two summaries."""
    w = _COMPARISON_LABEL_WIDTH
    lines = _section("COMPARISON")
    lines.extend(
        [
            _field("Speedup", f"{format_number(comparison.speedup)}x", w),
            _field("Throughput gain", format_pct(comparison.throughput_gain_pct), w),
            _field("Time saved per iter", f"{format_number(comparison.time_saved_ms)} ms", w),
        ]
    )
    if comparison.is_regression:
        lines.append(
            f"  Note: {comparison.variant_name} is slower than {comparison.baseline_name}."
        )
    return "\n".join(lines)


def format_report(report: BenchReport) -> str:
    """Format both summaries followed by the comparison."""
    return "\n".join(
        [
            format_summary(report.baseline),
            format_summary(report.variant),
            format_comparison(report.comparison),
        ]
    )
