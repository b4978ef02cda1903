"""Tests for structured logging context helpers."""

import logging
import unittest

from core.structured_logging import (
    _GenerationContextFilter,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)


def _record() -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
    _GenerationContextFilter().filter(record)
    return record


class TestStructuredLogging(unittest.TestCase):
    def test_set_run_id_generates_value(self) -> None:
        run_id = set_run_id()
        self.assertEqual(len(run_id), 12)
        self.assertEqual(get_run_id(), run_id)

    def test_set_run_id_explicit(self) -> None:
        self.assertEqual(set_run_id("abc"), "abc")
        self.assertEqual(_record().run_id, "abc")

    def test_phase_scope_restores(self) -> None:
        with phase_scope("extract"):
            self.assertEqual(_record().phase, "extract")
            with phase_scope("render"):
                self.assertEqual(_record().phase, "render")
            self.assertEqual(_record().phase, "extract")
        self.assertEqual(_record().phase, "-")

    def test_source_scope(self) -> None:
        with source_scope("Models/Order.cs"):
            self.assertEqual(_record().source, "Models/Order.cs")
        self.assertEqual(_record().source, "-")

    def test_scope_restored_after_error(self) -> None:
        with self.assertRaises(ValueError):
            with phase_scope("discover"):
                raise ValueError("boom")
        self.assertEqual(_record().phase, "-")


if __name__ == "__main__":
    unittest.main()
