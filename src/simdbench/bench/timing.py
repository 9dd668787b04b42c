"""Timing capture for single calls into a module variant.

Uses ``time.perf_counter()``: monotonic, unaffected by wall-clock
adjustments, and with sub-microsecond resolution on every supported
platform.
"""

from __future__ import annotations

import time

from simdbench.bench.errors import ForeignCallError
from simdbench.bench.module import DecompressModule
from simdbench.bench.results import RawSample


def _check_byte_count(produced: object) -> int:
    if isinstance(produced, bool) or not isinstance(produced, int) or produced < 0:
        raise ForeignCallError(
            f"decompress_once returned {produced!r}, expected a non-negative byte count"
        )
    return produced


def call_decompress(module: DecompressModule) -> int:
    """Call ``decompress_once`` untimed and return its byte count.

    Raises:
        ForeignCallError: If the call raises, or returns anything other
            than a non-negative integer.
    """
    try:
        produced = module.decompress_once()
    except Exception as exc:  # noqa: BLE001
        raise ForeignCallError(f"decompress_once failed: {exc}") from exc
    return _check_byte_count(produced)


def run_trial(module: DecompressModule) -> RawSample:
    """Execute one timed call to ``decompress_once``.

    Only the foreign call sits between the two clock reads; the return
    value is validated after the end time is taken.

    Raises:
        ForeignCallError: As for :func:`call_decompress`.
    """
    start = time.perf_counter()
    try:
        produced = module.decompress_once()
    except Exception as exc:  # noqa: BLE001
        raise ForeignCallError(f"decompress_once failed: {exc}") from exc
    end = time.perf_counter()

    return RawSample(
        elapsed_ms=(end - start) * 1000,
        bytes_produced=_check_byte_count(produced),
    )
