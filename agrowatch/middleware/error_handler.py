"""
Global error handling middleware.

Enrichment lookups never raise, so the failures that reach this layer are
dashboard-conditions outages, domain invariant violations and bugs.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from agrowatch.infrastructure.conditions_client import ExternalAPIError


logger = logging.getLogger(__name__)


def _error_body(error: str, detail: str) -> dict:
    return {"error": error, "detail": detail}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Turns exceptions escaping the routers into JSON error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Run the request and map escaping exceptions to responses.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response object
        """
        context = {"path": request.url.path, "method": request.method}
        try:
            return await call_next(request)

        except ExternalAPIError as e:
            logger.error(
                f"Upstream service failed: {e.message}",
                extra={**context, "status_code": e.status_code},
            )
            return JSONResponse(
                status_code=e.status_code,
                content=_error_body("Upstream service error", e.message),
            )

        except ValueError as e:
            # Domain invariant violations (e.g. a duplicate zone id)
            logger.warning(f"Rejected request: {str(e)}", extra=context)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=_error_body("Invalid request", str(e)),
            )

        except Exception as e:
            logger.exception(f"Unhandled exception: {str(e)}", extra=context)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=_error_body("Internal server error", "An unexpected error occurred"),
            )
