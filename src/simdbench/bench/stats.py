"""Summary statistics for a variant's timed trials.

Reduces a sample set to min, max, mean, median and throughput.  No
outlier rejection, trimming or confidence intervals: the two variants
are reduced the same simple way so their numbers compare directly.

The median is the element at index ``n // 2`` of the sorted times, so
for an even number of samples it is the *upper* of the two middle
values rather than their average (``[1, 2, 3, 4]`` gives ``3``).
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Sequence

from simdbench.bench.errors import EmptyInputError
from simdbench.bench.results import RawSample

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class SampleStats:
    """Statistics derived from one sample set."""

    min: float  # ms
    max: float  # ms
    mean: float  # ms
    median: float  # ms
    decompressed_size: float  # mean bytes per trial
    throughput_mbps: float


def throughput_mbps(decompressed_size: float, mean_ms: float) -> float:
    """Return MB/s for *decompressed_size* bytes produced every *mean_ms*.

    A zero mean cannot be measured and yields ``inf``; callers treat
    that as a degenerate run rather than an error.
    """
    if mean_ms == 0:
        return math.inf
    return (decompressed_size / BYTES_PER_MB) / (mean_ms / 1000)


def aggregate(samples: Sequence[RawSample]) -> SampleStats:
    """Reduce *samples* to summary statistics.

    Raises:
        EmptyInputError: If *samples* is empty.
    """
    if not samples:
        raise EmptyInputError("Cannot aggregate an empty sample set")

    n = len(samples)
    times = sorted(s.elapsed_ms for s in samples)
    mean = statistics.mean(times)
    decompressed_size = sum(s.bytes_produced for s in samples) / n

    return SampleStats(
        min=times[0],
        max=times[-1],
        mean=mean,
        median=times[n // 2],
        decompressed_size=decompressed_size,
        throughput_mbps=throughput_mbps(decompressed_size, mean),
    )
