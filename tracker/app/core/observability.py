"""
Observability helpers.

Structured logging context and timing for store operations.
"""

import logging
import time
from contextlib import contextmanager

from tracker.app.core.config import settings
from tracker.app.core.exceptions import ResourceNotFoundError


def configure_logging(level: str = None) -> None:
    """Attach a basic handler to the root logger at the configured level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@contextmanager
def track_operation(log: logging.Logger, operation: str, **context):
    """
    Log one store operation with its duration.
    
    Successful calls and misses are logged at DEBUG, failed ones at
    ERROR; the exception itself is always re-raised.
    """
    start_time = time.time()
    log_data = {"operation": operation, **context}
    try:
        yield log_data
    except ResourceNotFoundError:
        log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
        log.debug("Operation Missed", extra=log_data)
        raise
    except Exception as exc:
        log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
        log_data["error"] = type(exc).__name__
        log.error("Operation Failed", extra=log_data)
        raise
    log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
    log.debug("Operation Completed", extra=log_data)
