"""
Structured JSON logging for quality-engine

Every engine module logs through ``get_logger(__name__)``. Records are
rendered as one JSON object per line by python-json-logger; engine context
passed via ``extra`` (rule_name, rule_type, dataset_id, error_type, ...) lands
as top-level keys.
"""
import logging
import os
import sys
import time
from enum import Enum

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "quality-engine"

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for engine records

    Adds timestamp, level, logger, module and function, tags every record
    with the service name and renders enum values (Severity, RuleType) by value.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = log_record.get("timestamp") or self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record.setdefault("module", record.module)
        log_record.setdefault("function", record.funcName)
        log_record.setdefault("service", DEFAULT_LOGGER_NAME)

        for key, value in log_record.items():
            if isinstance(value, Enum):
                log_record[key] = value.value


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return CustomJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Configure a logger with a single stdout handler

    Args:
        name: Logger name
        level: Level name; defaults to the LOG_LEVEL env var, then INFO
        format_type: "json" or "text"; defaults to the LOG_FORMAT env var, then json

    Returns:
        The configured logger
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(_build_formatter(format_type or os.getenv("LOG_FORMAT", "json")))

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return the named logger, configuring it on first use."""
    logger = logging.getLogger(name)
    return logger if logger.handlers else setup_logger(name)


class log_operation:
    """
    Log the start, outcome and duration of an engine operation

    Usage:
        with log_operation("Quality check", logger=logger, dataset_id="orders-1"):
            report = ...

    Exceptions are logged with their traceback and re-raised.
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **context):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.context = context
        self.start_time: float | None = None
        self.duration: float | None = None

    def _fields(self, **fields) -> dict:
        return {"operation": self.operation_name, **self.context, **fields}

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting: {self.operation_name}", extra=self._fields())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        elapsed = round(self.duration, 3)

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name} in {elapsed}s",
                extra=self._fields(duration_seconds=elapsed, status="success"),
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name} after {elapsed}s: {exc_val}",
                extra=self._fields(
                    duration_seconds=elapsed,
                    status="error",
                    error_type=exc_type.__name__,
                ),
                exc_info=(exc_type, exc_val, exc_tb),
            )
        return False
