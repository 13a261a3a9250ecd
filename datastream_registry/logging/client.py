"""Structured logging client for local output or Google Cloud Logging."""

import json
import logging as python_logging
import sys
import traceback
from enum import Enum
from typing import Any

from google.cloud import logging as cloud_logging
from google.cloud.logging_v2 import Client
from google.cloud.logging_v2.logger import Logger as CloudLogger

from datastream_registry.logging.context import LoggingContext


class Severity(str, Enum):
    """Cloud Logging severities and their Python logging levels."""

    DEFAULT = "DEFAULT"
    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    ALERT = "ALERT"

    @property
    def python_level(self) -> int:
        return {
            self.DEFAULT: python_logging.INFO,
            self.DEBUG: python_logging.DEBUG,
            self.INFO: python_logging.INFO,
            self.NOTICE: python_logging.INFO,
            self.WARNING: python_logging.WARNING,
            self.ERROR: python_logging.ERROR,
            self.CRITICAL: python_logging.CRITICAL,
            self.ALERT: python_logging.CRITICAL,
        }[self]


class Logger:
    """Logs structured payloads with labels to Cloud Logging or a local stream."""

    def __init__(
        self,
        log_name: str,
        log_level: str = "INFO",
        use_cloud: bool = True,
        logging_client: Client | None = None,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Initialize the logging client.

        Args:
            log_name: Name of the logger
            log_level: Minimum log level to record
            use_cloud: Whether to use Google Cloud Logging
            logging_client: Optional preconfigured Cloud Logging client
            labels: Optional labels added to every entry
        """
        if not log_name:
            raise ValueError("Log name cannot be empty")
        self._log_name = log_name
        self._log_level = log_level.upper()
        self._logging_client = logging_client
        self._use_cloud = str(use_cloud).lower() == "true"
        self._labels = labels or {}
        self._initialize_logger()

    def _initialize_logger(self) -> None:
        if self._use_cloud:
            try:
                client: Client = self._logging_client or cloud_logging.Client()
                self._logger: CloudLogger | python_logging.Logger = client.logger(
                    name=self._log_name, labels=self._labels
                )
            except Exception as e:
                sys.stderr.write(f"Failed to initialize cloud logging: {e}\n")
                sys.stderr.write("Falling back to local logging\n")
                self._use_cloud = False
                self._setup_local_logging()
        else:
            self._setup_local_logging()

    def _setup_local_logging(self) -> None:
        self._logger = python_logging.getLogger(self._log_name)
        self._logger.setLevel(getattr(python_logging, self._log_level))

        # Avoid duplicate output when the same log name is reused
        self._logger.handlers.clear()

        formatter = python_logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler = python_logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

    @property
    def log_name(self) -> str:
        return self._log_name

    @property
    def labels(self) -> dict[str, str]:
        return self._labels

    def _prepare_payload(
        self,
        payload: dict[str, Any],
        labels: dict[str, str] | None,
    ) -> tuple[dict[str, Any], dict[str, str]]:
        final_labels = self._labels | (labels or {})
        final_labels.update(LoggingContext.get_labels())
        return payload.copy(), final_labels

    def log_struct(
        self,
        payload: dict,
        severity: Severity | None = None,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Log structured data with optional severity and labels."""
        severity_to_use = severity or Severity.DEFAULT
        if severity_to_use.python_level < getattr(python_logging, self._log_level):
            return
        prepared_payload, final_labels = self._prepare_payload(payload, labels)

        if isinstance(self._logger, CloudLogger):
            self._logger.log_struct(
                prepared_payload, severity=severity_to_use.value, labels=final_labels
            )
        else:
            self._logger.log(
                severity_to_use.python_level,
                json.dumps(prepared_payload | final_labels, default=str),
            )

    def log_text(
        self,
        message: str,
        *args: Any,
        severity: Severity | None = None,
        labels: dict[str, str] | None = None,
    ) -> None:
        if args:
            message = message % args
        self.log_struct({"message": message}, severity=severity, labels=labels)

    def log_exception(
        self,
        exc: BaseException,
        additional_message: str | None = None,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Log an exception with its full traceback."""
        payload = {
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "traceback": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
        }
        if additional_message:
            payload["additional_message"] = additional_message
        self.log_struct(payload, severity=Severity.ERROR, labels=labels)

    def log_debug(
        self, message: str, *args: Any, labels: dict[str, str] | None = None
    ) -> None:
        self.log_text(message, *args, severity=Severity.DEBUG, labels=labels)

    def log_warning(
        self, message: str, *args: Any, labels: dict[str, str] | None = None
    ) -> None:
        self.log_text(message, *args, severity=Severity.WARNING, labels=labels)

    def log_error(
        self, message: str, *args: Any, labels: dict[str, str] | None = None
    ) -> None:
        self.log_text(message, *args, severity=Severity.ERROR, labels=labels)
