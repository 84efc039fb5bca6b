"""
Logging Utilities for Consistent Structured Logging

Helpers for request-scoped context and timing around quote operations.
Engine calls finish in well under a second, so durations are reported in ms.
"""

import time
import logging
from typing import Dict, Any, Optional, Callable, TypeVar, List
from contextlib import contextmanager
from functools import wraps

logger = logging.getLogger(__name__)

T = TypeVar('T')

LOW_CONFIDENCE_THRESHOLD = 0.6


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


class Timer:
    """Simple timer context manager for measuring operation duration."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = _elapsed_ms(self.start_time)
        self.logger.debug(f"{self.name} completed in {self.duration_ms:.1f}ms")


@contextmanager
def log_operation(operation_name: str, context: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """
    Context manager for logging operation start, end, and duration with context.

    Usage:
        with log_operation("calculate_quote", {"request_id": "abc", "room_type": "office"}):
            # Do operation
            pass
    """
    logger = logger or logging.getLogger(__name__)
    start_time = time.perf_counter()

    logger.info(f"Starting {operation_name}", extra={
        'operation': operation_name,
        'context': context,
        'status': 'started'
    })

    try:
        yield
        duration = _elapsed_ms(start_time)
        logger.info(f"Completed {operation_name} in {duration:.1f}ms", extra={
            'operation': operation_name,
            'context': context,
            'status': 'completed',
            'duration_ms': duration
        })
    except Exception as e:
        duration = _elapsed_ms(start_time)
        logger.error(f"Failed {operation_name} after {duration:.1f}ms: {str(e)}", extra={
            'operation': operation_name,
            'context': context,
            'status': 'failed',
            'duration_ms': duration,
            'error_type': type(e).__name__,
            'error_message': str(e)
        })
        raise


def log_with_context(level: str, message: str, context: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """
    Log a message with structured context.

    Args:
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        context: Additional context data
        logger: Logger instance (uses module logger if None)
    """
    logger = logger or logging.getLogger(__name__)
    log_func = getattr(logger, level.lower(), logger.info)

    log_func(message, extra={'context': context})


def timed_operation(operation_name: Optional[str] = None):
    """
    Decorator to time function execution and log results.

    Usage:
        @timed_operation("generate_quote_options")
        def generate(calculation):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            name = operation_name or func.__name__
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                logger.debug(f"[TIMING] {name} completed in {_elapsed_ms(start_time):.1f}ms")
                return result
            except Exception as e:
                logger.error(f"[TIMING] {name} failed after {_elapsed_ms(start_time):.1f}ms: {str(e)}")
                raise

        return wrapper
    return decorator


def log_analysis_confidence(confidence_score: float,
                            insights: Optional[List[str]] = None,
                            logger: Optional[logging.Logger] = None):
    """
    Log how much the room analyzer trusted its own output.

    Args:
        confidence_score: Analyzer confidence (0.0-1.0)
        insights: Analyzer notes about the room
        logger: Logger instance
    """
    logger = logger or logging.getLogger(__name__)

    level = "info" if confidence_score >= LOW_CONFIDENCE_THRESHOLD else "warning"
    message = f"[ANALYSIS_CONFIDENCE] {confidence_score:.2f}"

    log_with_context(level, message, {
        'confidence_score': confidence_score,
        'insights': insights or [],
        'insights_count': len(insights) if insights else 0
    }, logger)


def create_operation_logger(operation_id: str, base_logger: Optional[logging.Logger] = None):
    """
    Create a logger that automatically includes operation ID in all messages.

    Args:
        operation_id: Unique operation identifier (the request id for HTTP calls)
        base_logger: Base logger to use

    Returns:
        Logger adapter with operation context
    """
    base_logger = base_logger or logging.getLogger(__name__)

    class OperationLoggerAdapter(logging.LoggerAdapter):
        def process(self, msg, kwargs):
            if 'extra' not in kwargs:
                kwargs['extra'] = {}
            kwargs['extra']['operation_id'] = operation_id
            return f"[{operation_id}] {msg}", kwargs

    return OperationLoggerAdapter(base_logger, {})
