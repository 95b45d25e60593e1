"""
Structured logging for skillmatch.

Console and file output with JSON-encoded context, plus counters for
how much scoring and skill extraction a session performed.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Centralized logger with console and file outputs.
    Tracks scoring and extraction counters for the current process.
    """

    def __init__(
        self,
        name: str = "skillmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "matches_scored": 0,
            "similarities_scored": 0,
            "text_comparisons": 0,
            "extractions_attempted": 0,
            "extractions_failed": 0,
            "errors_by_type": {},
        }

        if enable_console:
            # stderr keeps --json output on stdout parseable
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"skillmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking

    def record_match(self, count: int = 1):
        """Count job/candidate skill matches scored."""
        self.metrics["matches_scored"] += count

    def record_similarity(self, count: int = 1):
        """Count profile-to-profile similarities scored."""
        self.metrics["similarities_scored"] += count

    def record_text_comparison(self, count: int = 1):
        self.metrics["text_comparisons"] += count

    def record_extraction_attempt(self):
        self.metrics["extractions_attempted"] += 1

    def record_extraction_failure(self, error_type: str):
        """Record a failed entity extraction call by error type."""
        self.metrics["extractions_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        metrics = dict(self.metrics)
        metrics["errors_by_type"] = dict(self.metrics["errors_by_type"])
        attempted = metrics["extractions_attempted"]
        if attempted > 0:
            metrics["extraction_success_rate"] = round(
                (attempted - metrics["extractions_failed"]) / attempted, 3
            )
        return metrics

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Session Metrics ===")
        self.info(f"Matches scored: {metrics['matches_scored']}")
        self.info(f"Similarities scored: {metrics['similarities_scored']}")
        self.info(f"Text comparisons: {metrics['text_comparisons']}")

        if metrics["extractions_attempted"]:
            rate = metrics["extraction_success_rate"] * 100
            self.info(
                f"Entity extractions: {metrics['extractions_attempted']} "
                f"({rate:.1f}% success)"
            )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "skillmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Arguments only take effect on the first call (or after reset_logger).
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
