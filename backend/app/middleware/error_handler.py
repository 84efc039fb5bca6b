from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import traceback
import logging
from typing import Dict, Any, Optional

from app import config
from services.error_types import (
    InvalidInputError,
    QuoteEngineError,
    log_error_with_context,
)

logger = logging.getLogger(__name__)

def create_error_response(error_type: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Create structured error response"""
    error: Dict[str, Any] = {
        "type": error_type,
        "message": message
    }
    if details:
        error["details"] = details
    return {
        "success": False,
        "error": error
    }

def _status_for(exc: QuoteEngineError) -> int:
    # ReferenceDataMissingError and CatalogError are server-side configuration bugs
    if isinstance(exc, InvalidInputError):
        return 400
    return 500

async def quote_engine_exception_handler(request: Request, exc: QuoteEngineError):
    status_code = _status_for(exc)
    log_error_with_context(exc, {"path": request.url.path, "status_code": status_code})

    # Configuration problems are not the caller's business beyond the type
    if status_code >= 500 and not config.DEBUG:
        content = create_error_response(type(exc).__name__, "Quote engine is misconfigured")
    else:
        content = create_error_response(type(exc).__name__, exc.message, exc.details or None)
    return JSONResponse(status_code=status_code, content=content)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    logger.info(f"Rejected request to {request.url.path}: {len(errors)} validation errors")
    return JSONResponse(
        status_code=422,
        content=create_error_response("ValidationError", "Request body is invalid", errors)
    )

async def traceback_exception_handler(request: Request, exc: Exception):
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(tb)

    if config.DEBUG:
        content = create_error_response("InternalServerError", tb)
    else:
        content = create_error_response("InternalServerError", "Internal server error")

    return JSONResponse(status_code=500, content=content)

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuoteEngineError, quote_engine_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, traceback_exception_handler)
