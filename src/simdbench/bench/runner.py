"""Benchmark execution engine.

Orchestrates, for each module variant in turn:
1. Reading the corpus metadata (compressed size, SIMD flag, file count)
2. Warmup calls whose results are discarded
3. Timed trials, one blocking call at a time
4. Reduction of the samples to a Summary

The baseline is always benchmarked first and the SIMD variant second,
never concurrently, so the two runs do not compete for the CPU.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from simdbench.bench.compare import compare
from simdbench.bench.config import WARMUP_ITERATIONS, BenchConfig, validate_config
from simdbench.bench.errors import InvalidArgumentError
from simdbench.bench.module import DecompressModule, load_module
from simdbench.bench.results import BenchReport, RawSample, Summary
from simdbench.bench.stats import aggregate
from simdbench.bench.timing import call_decompress, run_trial
from simdbench.logging import get_logger

log = get_logger("runner")


# ---------------------------------------------------------------------------
# Progress callback
# ---------------------------------------------------------------------------


@dataclass
class BenchProgress:
    """Progress info passed to the callback after every call."""

    phase: str  # "warmup" or "measure"
    variant: str
    iteration: int  # 1-based
    total_iterations: int
    elapsed_ms: float = 0.0  # 0.0 during warmup
    bytes_produced: int = 0


ProgressCallback = Callable[[BenchProgress], None]


def _default_progress(progress: BenchProgress) -> None:
    """Default progress callback: per-trial timings at DEBUG."""
    marker = "W" if progress.phase == "warmup" else "M"
    line = f"  {progress.variant:20s} {marker}{progress.iteration}/{progress.total_iterations}"
    if progress.phase == "measure":
        line += f" {progress.elapsed_ms:10.2f} ms {progress.bytes_produced:>12d} bytes"
    log.debug(line)


# ---------------------------------------------------------------------------
# Single-variant executor
# ---------------------------------------------------------------------------


def _check_count(value: Any, field: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{field} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgumentError(f"{field} must be >= {minimum}, got {value}")


def run_benchmark(
    module: DecompressModule,
    name: str,
    iterations: int,
    *,
    warmup: int = WARMUP_ITERATIONS,
    progress_callback: ProgressCallback | None = None,
) -> Summary:
    """Warm up *module*, time *iterations* calls and summarize them.

    Args:
        module: A loaded module variant.
        name: Display name for the resulting Summary.
        iterations: Number of timed trials (>= 1).
        warmup: Number of untimed calls made first (>= 0).
        progress_callback: Called after every warmup and timed call.

    Returns:
        The Summary for this variant.

    Raises:
        InvalidArgumentError: If *iterations* < 1 or *warmup* < 0.
        ForeignCallError: If any call fails; no partial Summary is made.
    """
    _check_count(iterations, "iterations", 1)
    _check_count(warmup, "warmup", 0)
    progress = progress_callback or _default_progress

    compressed_size = module.get_compressed_size()
    simd_enabled = bool(module.is_simd_enabled())
    log.debug(
        "%s: %d files, %d compressed bytes, SIMD %s",
        name,
        module.get_file_count(),
        compressed_size,
        "on" if simd_enabled else "off",
    )

    log.info("  Warming up (%d iterations)...", warmup)
    for i in range(warmup):
        call_decompress(module)
        progress(BenchProgress("warmup", name, i + 1, warmup))

    log.info("  Running %d iterations...", iterations)
    samples: list[RawSample] = []
    for i in range(iterations):
        sample = run_trial(module)
        samples.append(sample)
        progress(
            BenchProgress(
                "measure",
                name,
                i + 1,
                iterations,
                elapsed_ms=sample.elapsed_ms,
                bytes_produced=sample.bytes_produced,
            )
        )

    stats = aggregate(samples)
    return Summary(
        name=name,
        simd_enabled=simd_enabled,
        compressed_size=compressed_size,
        decompressed_size=stats.decompressed_size,
        iterations=iterations,
        min=stats.min,
        max=stats.max,
        mean=stats.mean,
        median=stats.median,
        throughput_mbps=stats.throughput_mbps,
    )


# ---------------------------------------------------------------------------
# BenchRunner
# ---------------------------------------------------------------------------


class BenchRunner:
    """Benchmarks both variants described by a BenchConfig.

    Usage::

        runner = BenchRunner(config)
        baseline, simd = runner.load_modules()
        report = runner.run(baseline, simd)
    """

    def __init__(
        self,
        config: BenchConfig,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.config = config
        self.progress = progress_callback
        self._validated = False

    def validate(self) -> None:
        """Log warnings and raise InvalidArgumentError on fatal config errors."""
        errors = validate_config(self.config)
        fatal = [e for e in errors if e.severity == "error"]
        for w in errors:
            if w.severity == "warning":
                log.warning("%s: %s", w.field, w.message)
        if fatal:
            messages = [f"  {e.field}: {e.message}" for e in fatal]
            raise InvalidArgumentError(
                "Invalid benchmark configuration:\n" + "\n".join(messages)
            )
        self._validated = True

    def load_modules(self) -> tuple[DecompressModule, DecompressModule]:
        """Load the baseline and SIMD variants, in that order.

        Raises:
            ModuleLoadError: For the first variant that cannot be loaded.
        """
        modules: list[DecompressModule] = []
        for variant in self.config.variants:
            log.info("Loading %s module...", variant.label)
            modules.append(
                load_module(
                    variant.resolve_path(self.config.pkg_root),
                    self.config.module_name,
                    label=variant.label,
                    hints=variant.build_hints,
                )
            )
        return modules[0], modules[1]

    def run(
        self,
        baseline_module: DecompressModule,
        simd_module: DecompressModule,
    ) -> BenchReport:
        """Benchmark both variants sequentially and compare them."""
        if not self._validated:
            self.validate()
        cfg = self.config

        log.info("\nRunning %s benchmark...", cfg.baseline.label)
        baseline = run_benchmark(
            baseline_module,
            cfg.baseline.name,
            cfg.iterations,
            warmup=cfg.warmup,
            progress_callback=self.progress,
        )

        log.info("\nRunning %s benchmark...", cfg.simd.label)
        variant = run_benchmark(
            simd_module,
            cfg.simd.name,
            cfg.iterations,
            warmup=cfg.warmup,
            progress_callback=self.progress,
        )

        return BenchReport(
            baseline=baseline,
            variant=variant,
            comparison=compare(baseline, variant),
            warmup=cfg.warmup,
        )
