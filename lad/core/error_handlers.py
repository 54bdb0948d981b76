"""
Centralized exception handling module.

This module provides consistent error handling across the application with:
- Structured error responses
- Detailed logging
- HTTP status code mapping
"""

import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from lad.core.exceptions import LadException
from lad.core.logging import logger


def create_error_response(
    status_code: int,
    message: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Create a standardized error response dictionary.

    Args:
        status_code: HTTP status code
        message: Error message
        error_type: Type of error
        details: Additional error details

    Returns:
        Structured error response dictionary
    """
    response = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": error_type
        }
    }
    if details:
        response["error"]["details"] = details
    return response


async def lad_exception_handler(
    request: Request,
    exc: LadException
) -> JSONResponse:
    """Handle application exceptions with structured logging."""
    logger.error(
        "Application error",
        extra={
            "error_type": exc.__class__.__name__,
            "error": str(exc.detail),
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            **exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            error_type=exc.__class__.__name__,
            details={"service_name": exc.context["service_name"]} if "service_name" in exc.context else None
        ),
        headers=exc.headers
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle any unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        extra={
            "error_type": exc.__class__.__name__,
            "error": str(exc),
            "path": request.url.path,
            "method": request.method,
            "traceback": traceback.format_exc()
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An unexpected error occurred",
            error_type="InternalServerError"
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LadException, lad_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
