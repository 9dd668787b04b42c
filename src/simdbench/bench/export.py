"""Export a finished benchmark run to JSON and Markdown.

JSON format: ``BenchReport.to_dict()``, indented.  Non-finite values
(an unmeasurably fast run) are written as ``null``.

Markdown format: a summary table suitable for pull requests and
GitHub issues, followed by the comparison.
"""

from __future__ import annotations

import json

from simdbench.bench.display import format_number, format_pct
from simdbench.bench.results import BenchReport, Summary
from simdbench.bench.stats import BYTES_PER_MB


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def export_json(report: BenchReport) -> str:
    """Export *report* as an indented JSON document."""
    return json.dumps(report.to_dict(), indent=2) + "\n"


# ---------------------------------------------------------------------------
# Markdown export
# ---------------------------------------------------------------------------


def _markdown_row(s: Summary) -> str:
    return (
        f"| {s.name} | {'yes' if s.simd_enabled else 'no'} | {s.iterations} "
        f"| {format_number(s.min)} | {format_number(s.median)} "
        f"| {format_number(s.mean)} | {format_number(s.max)} "
        f"| {format_number(s.decompressed_size / BYTES_PER_MB)} "
        f"| {format_number(s.throughput_mbps)} |"
    )


def export_markdown(report: BenchReport) -> str:
    """Export *report* as a Markdown summary."""
    comp = report.comparison
    lines: list[str] = []

    lines.append("## Decompression Benchmark")
    lines.append("")
    lines.append(
        f"{report.baseline.iterations} measured iterations per variant "
        f"after {report.warmup} warmup calls. "
        f"Compressed corpus: {format_number(report.baseline.compressed_size / 1024)} KB."
    )
    lines.append("")
    lines.append(
        "| Variant | SIMD | Iterations | Min (ms) | Median (ms) "
        "| Mean (ms) | Max (ms) | Output (MB) | Throughput (MB/s) |"
    )
    lines.append("|---|---|---:|---:|---:|---:|---:|---:|---:|")
    lines.append(_markdown_row(report.baseline))
    lines.append(_markdown_row(report.variant))
    lines.append("")
    lines.append(f"### {comp.variant_name} vs {comp.baseline_name}")
    lines.append("")
    lines.append(f"- **Speedup:** {format_number(comp.speedup)}x")
    lines.append(f"- **Throughput gain:** {format_pct(comp.throughput_gain_pct)}")
    lines.append(f"- **Time saved per iteration:** {format_number(comp.time_saved_ms)} ms")

    return "\n".join(lines) + "\n"
