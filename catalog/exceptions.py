"""
Catalog exceptions and their FastAPI handlers.

Every error leaves the service in one shape:

    {"success": false, "error": {"code": ..., "message": ..., "timestamp": ...}}
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None,
                 status_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = dict(details or {})
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp,
        }
        if self.details:
            error["details"] = self.details
        return {"success": False, "error": error}


class ValidationError(CatalogError):
    """A create request is missing a field or has one of the wrong shape."""

    code = "VALIDATION_ERROR"
    status_code = 422


class NotFoundError(CatalogError):
    code = "PRODUCT_NOT_FOUND"
    status_code = 404


class StoreFailure(CatalogError):
    """An underlying store operation failed unexpectedly."""

    code = "STORE_FAILURE"
    status_code = 500


async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(errors))
    wrapped = ValidationError("invalid request", details={"errors": errors})
    return JSONResponse(status_code=wrapped.status_code, content=wrapped.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    wrapped = StoreFailure("internal error")
    return JSONResponse(status_code=wrapped.status_code, content=wrapped.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
