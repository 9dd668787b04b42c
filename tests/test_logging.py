"""Tests for simdbench.logging."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from simdbench.logging import get_logger, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Tests for setup_logging()."""

    def tearDown(self) -> None:
        logger = logging.getLogger("simdbench")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def _console_level(self, logger: logging.Logger) -> int:
        return logger.handlers[0].level

    def test_default_level_info(self) -> None:
        self.assertEqual(self._console_level(setup_logging()), logging.INFO)

    def test_verbose(self) -> None:
        self.assertEqual(self._console_level(setup_logging(verbose=True)), logging.DEBUG)

    def test_quiet(self) -> None:
        self.assertEqual(self._console_level(setup_logging(quiet=True)), logging.WARNING)

    def test_verbose_wins_over_quiet(self) -> None:
        logger = setup_logging(verbose=True, quiet=True)
        self.assertEqual(self._console_level(logger), logging.DEBUG)

    def test_reconfigure_replaces_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        self.assertEqual(len(logger.handlers), 1)

    def test_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bench.log"
            logger = setup_logging(quiet=True, log_file=path)
            get_logger("runner").debug("trial 1 done")
            for handler in logger.handlers:
                handler.flush()
            self.assertIn("trial 1 done", path.read_text())
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_log_file_is_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bench.log"
            path.write_text("stale run\n")
            logger = setup_logging(log_file=path)
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
            self.assertNotIn("stale run", path.read_text())

    def test_get_logger_namespace(self) -> None:
        self.assertEqual(get_logger("runner").name, "simdbench.runner")

    def test_child_records_reach_setup_logger(self) -> None:
        with self.assertLogs("simdbench", level="INFO") as cm:
            get_logger("module").info("Loading simd module...")
        self.assertEqual(cm.records[0].name, "simdbench.module")


class TestConsoleFormatter(unittest.TestCase):
    """Tests for the console message format."""

    def _format(self, level: int, message: str) -> str:
        logger = setup_logging()
        record = logging.LogRecord("simdbench.runner", level, __file__, 1, message, None, None)
        text = logger.handlers[0].format(record)
        logger.handlers.clear()
        return text

    def test_info_is_plain(self) -> None:
        text = self._format(logging.INFO, "  Running 10 iterations...")
        self.assertEqual(text, "  Running 10 iterations...")

    def test_warning_has_level(self) -> None:
        text = self._format(logging.WARNING, "warmup: No warmup")
        self.assertEqual(text, "WARNING: warmup: No warmup")


if __name__ == "__main__":
    unittest.main()
