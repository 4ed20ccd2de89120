"""
Structured Logging for Tickers Generator

Records are written as one JSON object per line. Each invocation gets a
RunLogger, an adapter that stamps its run id on every record; that adapter
is what the pipeline stages receive.
"""

import atexit
import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

# Record attribute holding the structured fields of a log call
FIELDS_ATTR = 'extra_fields'

RUN_LOGGER_NAME = 'tickers_generator.run'
QUIET_LOGGERS = ('google.auth', 'google.cloud', 'urllib3', 'requests')

StageLogger = Union[logging.Logger, logging.LoggerAdapter]

_cloud_logging_client = None


class StructuredFormatter(logging.Formatter):
    """Render a record and its structured fields as a single JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update(getattr(record, FIELDS_ATTR, {}))

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(
            {key: value for key, value in entry.items() if value is not None},
            default=str,
            ensure_ascii=False,
        )


class RunLogger(logging.LoggerAdapter):
    """Adapter that binds the run id to every record it emits"""

    def __init__(self, logger: logging.Logger, run_id: Optional[str] = None):
        super().__init__(logger, {'run_id': run_id})

    @property
    def run_id(self) -> Optional[str]:
        return self.extra['run_id']

    def process(self, msg, kwargs):
        # Fields given at the call site win over the bound ones
        extra = dict(kwargs.get('extra') or {})
        extra[FIELDS_ATTR] = {**self.extra, **extra.get(FIELDS_ATTR, {})}
        kwargs['extra'] = extra
        return msg, kwargs


def setup_structured_logging(
    log_level: str = "INFO",
    run_id: Optional[str] = None,
    gcp_logging: bool = False,
) -> RunLogger:
    """
    Send all records to stdout as JSON lines and return the run logger.

    The root handlers are replaced on every call, so a warm serverless
    instance that handles several invocations does not stack handlers.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        run_id: Invocation id stamped on every record of the returned logger
        gcp_logging: Also ship records to Google Cloud Logging

    Returns:
        RunLogger: Logger to inject into the pipeline stages
    """
    level = getattr(logging, log_level.upper())

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    root.addHandler(console_handler)

    if gcp_logging:
        root.addHandler(_cloud_logging_handler())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return RunLogger(logging.getLogger(RUN_LOGGER_NAME), run_id=run_id)


def _cloud_logging_handler() -> logging.Handler:
    """Cloud Logging handler; one client is shared by the whole process"""
    global _cloud_logging_client

    if _cloud_logging_client is None:
        from google.cloud import logging as cloud_logging
        _cloud_logging_client = cloud_logging.Client()
        atexit.register(_close_cloud_logging_client)

    return _cloud_logging_client.get_default_handler()


def _close_cloud_logging_client():
    global _cloud_logging_client

    if _cloud_logging_client is not None:
        _cloud_logging_client.close()
        _cloud_logging_client = None


class PerformanceLogger:
    """Context manager timing one pipeline stage"""

    def __init__(self, logger: StageLogger, operation: str, **fields):
        self.logger = logger
        self.operation = operation
        self.fields = fields
        self.duration: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self) -> 'PerformanceLogger':
        self._started = time.perf_counter()
        log_event(self.logger, logging.DEBUG, f"Starting {self.operation}",
                  operation=self.operation, status='started', **self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self._started
        failed = exc_type is not None

        metrics = {
            'operation': self.operation,
            'duration_seconds': round(self.duration, 3),
            'status': 'failed' if failed else 'completed',
        }
        if failed:
            metrics['error'] = {'type': exc_type.__name__, 'message': str(exc_val)}

        log_event(
            self.logger,
            logging.ERROR if failed else logging.INFO,
            f"{'Failed' if failed else 'Completed'} {self.operation} in {self.duration:.3f}s",
            performance_metrics=metrics,
            **self.fields,
        )
        return False


def log_event(logger: StageLogger, level: int, message: str, **fields):
    """Log message with structured fields"""
    logger.log(level, message, extra={FIELDS_ATTR: fields})


def log_operation_start(logger: StageLogger, operation: str, **fields):
    log_event(logger, logging.INFO, f"Starting {operation}", operation=operation, status='started', **fields)


def log_operation_success(logger: StageLogger, operation: str, **fields):
    log_event(logger, logging.INFO, f"Completed {operation}", operation=operation, status='success', **fields)


def log_operation_failure(logger: StageLogger, operation: str, error: Exception, **fields):
    """Log a failed operation with the error and its traceback"""
    logger.error(
        f"Failed {operation}",
        exc_info=error,
        extra={FIELDS_ATTR: {
            'operation': operation,
            'status': 'failed',
            'error_type': type(error).__name__,
            'error_message': str(error),
            **fields,
        }},
    )


def log_data_processing(logger: StageLogger, operation: str, count: int, **fields):
    log_event(logger, logging.INFO, f"{operation}: {count} instruments",
              operation=operation, item_count=count, **fields)


def log_api_call(logger: StageLogger, method: str, url: str, status_code: int, duration: float):
    log_event(
        logger,
        logging.INFO,
        f"{method} {url} -> {status_code} ({duration:.3f}s)",
        http_method=method,
        url=url,
        status_code=status_code,
        duration_seconds=round(duration, 3),
    )
