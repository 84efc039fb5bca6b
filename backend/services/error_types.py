"""
Custom Error Types for the Room Cooling Quote Engine

Separates critical errors that must stop a quote request from non-critical
conditions that are logged and then skipped (a tier with no catalog units is
the usual example).
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class QuoteEngineError(Exception):
    """Base exception for all quote engine errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CriticalError(QuoteEngineError):
    """
    Critical errors that should stop processing.

    Examples:
    - No room analysis supplied
    - Room area is zero or negative
    - Reference tables or catalog are incomplete
    """
    pass


class NonCriticalError(QuoteEngineError):
    """
    Non-critical errors that can be logged but shouldn't stop processing.
    """
    pass


class InvalidInputError(CriticalError):
    """
    Input validation errors raised before the engine runs.

    Examples:
    - Missing RoomAnalysis
    - area <= 0
    """
    pass


class ReferenceDataMissingError(CriticalError, LookupError):
    """
    A closed-enum key (room type, climate zone, orientation, ...) has no entry
    in the reference tables. This is a configuration bug, never user error.
    """

    def __init__(self, table: str, key: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Reference table '{table}' has no entry for '{key}'", details)
        self.table = table
        self.key = key


class CatalogError(CriticalError):
    """
    The equipment catalog document could not be loaded.

    Examples:
    - Catalog file not found
    - Duplicate unit ids
    - Unit with a non-positive price or capacity
    """
    pass


class NoCandidateUnitsError(NonCriticalError):
    """
    A quote tier has no catalog units to choose from. The tier is omitted
    from the result; callers receive fewer than three options.
    """

    def __init__(self, tier: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"No catalog units available for tier '{tier}'", details)
        self.tier = tier


def log_error_with_context(error: QuoteEngineError, context: Dict[str, Any]):
    """
    Log error with additional context information.

    Args:
        error: Error to log
        context: Additional context (request_id, stage, etc.)
    """
    log_data = {
        'error_type': type(error).__name__,
        'error_message': error.message,
        'details': error.details,
        'context': context
    }

    if isinstance(error, CriticalError):
        logger.error(f"CRITICAL ERROR: {error.message}", extra=log_data)
    else:
        logger.info(f"Non-critical error: {error.message}", extra=log_data)
