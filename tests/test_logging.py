"""Tests for logging setup and phase timing."""

import logging
import threading

import structlog

from chromaqa.logging import PerformanceLogger, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_root_level(self) -> None:
        setup_logging(level="WARNING", structured=False, colorize=False)

        assert logging.getLogger().level == logging.WARNING

    def test_writes_log_file(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "chromaqa.log"

        setup_logging(level="INFO", log_file=log_file, console=False)
        logging.getLogger("chromaqa.test").info("hello from the extractor")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from the extractor" in log_file.read_text(encoding="utf-8")

    def test_get_logger_returns_structlog_logger(self) -> None:
        logger = get_logger("chromaqa.test")

        assert hasattr(logger, "info")
        assert structlog.is_configured()


class TestPerformanceLogger:
    """Tests for PerformanceLogger."""

    def test_log_timing_records_stats(self) -> None:
        perf = PerformanceLogger()

        perf.log_timing("color_histogram", 0.5)
        perf.log_timing("color_histogram", 1.5)

        stats = perf.get_stats("color_histogram")
        assert stats["count"] == 2
        assert stats["mean"] == 1.0
        assert stats["min"] == 0.5
        assert stats["max"] == 1.5
        assert stats["total"] == 2.0

    def test_timed_block(self) -> None:
        perf = PerformanceLogger()

        with perf.timed("region_detection", colors=3):
            pass

        assert perf.get_stats("region_detection")["count"] == 1
        assert perf.get_stats("region_detection")["min"] >= 0

    def test_unknown_operation(self) -> None:
        assert PerformanceLogger().get_stats("nothing") == {}

    def test_all_stats(self) -> None:
        perf = PerformanceLogger()
        perf.log_timing("a", 1.0)
        perf.log_timing("b", 2.0)

        assert set(perf.get_stats()) == {"a", "b"}

    def test_history_is_bounded(self) -> None:
        perf = PerformanceLogger(history=3)

        for duration in (1.0, 2.0, 3.0, 4.0, 5.0):
            perf.log_timing("region_detection", duration)

        stats = perf.get_stats("region_detection")
        assert stats["count"] == 3
        assert stats["min"] == 3.0
        assert stats["max"] == 5.0

    def test_concurrent_timings_are_all_recorded(self) -> None:
        perf = PerformanceLogger(history=10_000)

        def record() -> None:
            for _ in range(500):
                perf.log_timing("color_histogram", 0.001)

        workers = [threading.Thread(target=record) for _ in range(4)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        assert perf.get_stats("color_histogram")["count"] == 2000

    def test_does_not_configure_root_logger(self) -> None:
        before = list(logging.getLogger().handlers)

        perf = PerformanceLogger()
        with perf.timed("structural_extraction", elements=1):
            pass

        assert logging.getLogger().handlers == before

    def test_logs_through_given_logger(self, caplog) -> None:
        perf = PerformanceLogger(logging.getLogger("chromaqa.timings"))

        with caplog.at_level(logging.DEBUG, logger="chromaqa.timings"):
            perf.log_timing("color_histogram", 0.25, width=10)

        assert "color_histogram took 0.2500s width=10" in caplog.text
