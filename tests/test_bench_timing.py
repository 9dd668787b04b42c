"""Tests for simdbench.bench.timing: single timed calls."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from bench_test_helpers import FakeModule

from simdbench.bench.errors import ForeignCallError
from simdbench.bench.results import RawSample
from simdbench.bench.timing import call_decompress, run_trial


class TestRunTrial(unittest.TestCase):
    """Tests for run_trial()."""

    def test_records_elapsed_ms_and_bytes(self) -> None:
        module = FakeModule(produced=4096)
        with patch("simdbench.bench.timing.time.perf_counter", side_effect=[10.0, 10.0125]):
            sample = run_trial(module)
        self.assertIsInstance(sample, RawSample)
        self.assertAlmostEqual(sample.elapsed_ms, 12.5, places=6)
        self.assertEqual(sample.bytes_produced, 4096)
        self.assertEqual(module.calls, 1)

    def test_real_clock_is_non_negative(self) -> None:
        sample = run_trial(FakeModule(produced=1))
        self.assertGreaterEqual(sample.elapsed_ms, 0.0)

    def test_foreign_exception_wrapped(self) -> None:
        module = FakeModule(fail_on_call=1)
        with self.assertRaises(ForeignCallError) as ctx:
            run_trial(module)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIn("corrupt frame", str(ctx.exception))

    def test_negative_byte_count_rejected(self) -> None:
        with self.assertRaises(ForeignCallError):
            run_trial(FakeModule(produced=-1))

    def test_non_integer_byte_count_rejected(self) -> None:
        module = FakeModule()
        module.decompress_once = lambda: "lots"  # type: ignore[method-assign]
        with self.assertRaises(ForeignCallError):
            run_trial(module)

    def test_bool_byte_count_rejected(self) -> None:
        module = FakeModule()
        module.decompress_once = lambda: True  # type: ignore[method-assign]
        with self.assertRaises(ForeignCallError):
            run_trial(module)

    def test_zero_bytes_allowed(self) -> None:
        self.assertEqual(run_trial(FakeModule(produced=0)).bytes_produced, 0)


class TestCallDecompress(unittest.TestCase):
    """Tests for call_decompress()."""

    def test_returns_byte_count(self) -> None:
        self.assertEqual(call_decompress(FakeModule(produced=77)), 77)

    def test_does_not_read_clock(self) -> None:
        with patch("simdbench.bench.timing.time.perf_counter") as clock:
            call_decompress(FakeModule())
        clock.assert_not_called()

    def test_failure_wrapped(self) -> None:
        with self.assertRaises(ForeignCallError):
            call_decompress(FakeModule(fail_on_call=1))

    def test_foreign_call_error_is_runtime_error(self) -> None:
        with self.assertRaises(RuntimeError):
            call_decompress(FakeModule(fail_on_call=1))


if __name__ == "__main__":
    unittest.main()
