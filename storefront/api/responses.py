import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from storefront.core.constants import INTERNAL_ERROR
from storefront.core.errors import DataStoreError, StorefrontError

log = logging.getLogger(__name__)


def error_response(request: Request, exc: StorefrontError) -> JSONResponse:
    """Client errors answer with {message}; store failures with {error}."""
    if not isinstance(exc, DataStoreError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    settings = request.app.state.settings
    if settings.expose_errors:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": INTERNAL_ERROR})
