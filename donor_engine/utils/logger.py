"""
Logging infrastructure for the donor activity engine.

Provides:
- Structured key=value messages with millisecond timestamps
- Optional console and file output
- Tracking of warnings, errors and repaired source records for reporting
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"


class MillisecondsFormatter(logging.Formatter):
    """Formatter that includes milliseconds and aligns log levels."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            s = ct.strftime(datefmt.replace(",%f", ""))
            return s + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        else:
            return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


def _format_value(value) -> str:
    try:
        return str(value)
    except ValueError:
        # int beyond the interpreter's str conversion limit
        return f"<{type(value).__name__}>"


def _format_fields(message: str, fields: dict) -> str:
    if not fields:
        return message
    formatted_data = " ".join(f"{k}={_format_value(v)}" for k, v in fields.items())
    return f"{message} [{formatted_data}]"


class EngineLogger:
    """
    Logger for engine runs with structured output and issue tracking.

    Without console or log_file the logger attaches no handlers and leaves
    output to whatever the host application configured.
    """

    def __init__(
        self,
        name: str = "donor_engine",
        log_level: Optional[str] = None,
        console: bool = False,
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
    ):
        """
        Initialize the engine logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR). Left unset,
                the logger keeps the level the host configured unless
                handlers are attached here, which default to INFO.
            console: Attach a stdout handler with the engine format
            log_file: Optional log file name
            log_dir: Directory for log files (defaults to ./logs)
        """
        self.logger = logging.getLogger(name)
        if log_level is None and (console or log_file):
            log_level = "INFO"
        if log_level is not None:
            self.logger.setLevel(getattr(logging, log_level.upper()))

        if console or log_file:
            # Own handlers, so don't duplicate through the root logger
            self.logger.propagate = False
            self.logger.handlers.clear()
            formatter = MillisecondsFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S,%f")

            if console:
                console_handler = logging.StreamHandler(sys.stdout)
                console_handler.setLevel(getattr(logging, log_level.upper()))
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)

            if log_file:
                if log_dir is None:
                    log_dir = Path.cwd() / "logs"
                log_dir.mkdir(parents=True, exist_ok=True)
                log_path = log_dir / log_file

                file_handler = logging.FileHandler(log_path)
                file_handler.setLevel(logging.DEBUG)  # Everything goes to file
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

                self.info(f"Logging to file: {log_path}")

        self.errors = []
        self.warnings = []
        self.data_issues = []

    def debug(self, message: str, **kwargs):
        self.logger.debug(_format_fields(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        self.logger.info(_format_fields(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message and track for reporting."""
        message = _format_fields(message, kwargs)
        self.logger.warning(message, stacklevel=2)
        self.warnings.append(
            {
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message and track for reporting."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        message = _format_fields(message, kwargs)

        self.logger.error(message, exc_info=exception is not None, stacklevel=2)
        self.errors.append(
            {
                "message": message,
                "exception": str(exception) if exception else None,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def log_data_issue(self, source: str, record_id: str, issue: str, **kwargs):
        """
        Log a source record that had to be repaired or skipped.

        Args:
            source: Source name (e.g., "HospitalDonation")
            record_id: Raw record id, or a positional placeholder
            issue: Short description (e.g., "unparsable timestamp")
        """
        fields = {"source": source, "record_id": record_id, **kwargs}
        message = _format_fields(f"Repaired source record: {issue}", fields)
        self.logger.debug(message, stacklevel=2)
        self.data_issues.append(
            {
                "source": source,
                "record_id": record_id,
                "issue": issue,
                "data": kwargs,
            }
        )

    def log_profile_computed(
        self,
        ledger_size: int,
        payments: int,
        tier: str,
        eligible_now: bool,
        duration_seconds: float,
    ):
        """Log completion of a profile computation."""
        message = (
            f"Computed donor profile [ledger_size={ledger_size} payments={payments} tier={tier} "
            f"eligible_now={eligible_now} duration_seconds={round(duration_seconds, 4)}]"
        )
        self.logger.info(message, stacklevel=2)

    @contextmanager
    def time_operation(self, operation: str, **kwargs):
        """
        Context manager to time and log an engine operation.

        Usage:
            with logger.time_operation("merge", sources=2):
                # ... perform operation ...
        """
        start_time = datetime.now()
        try:
            yield
            duration = (datetime.now() - start_time).total_seconds()
            self.debug(f"Completed {operation}", duration_seconds=round(duration, 4), **kwargs)
        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            self.error(f"Failed {operation}", exception=e, duration_seconds=round(duration, 4), **kwargs)
            raise

    def generate_summary(self) -> dict:
        """Aggregate tracked issues, grouped by source."""
        issues_by_source: dict[str, int] = {}
        for issue in self.data_issues:
            issues_by_source[issue["source"]] = issues_by_source.get(issue["source"], 0) + 1

        return {
            "data_issues": {
                "total": len(self.data_issues),
                "by_source": issues_by_source,
                "details": self.data_issues,
            },
            "errors": {
                "total": len(self.errors),
                "details": self.errors,
            },
            "warnings": {
                "total": len(self.warnings),
                "details": self.warnings,
            },
            "timestamp": datetime.now().isoformat(),
        }

    def clear_tracking(self):
        """Clear tracked errors, warnings and data issues."""
        self.errors = []
        self.warnings = []
        self.data_issues = []
