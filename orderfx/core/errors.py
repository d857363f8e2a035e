"""Domain error taxonomy and the JSON handlers that surface it over HTTP.

Every handler answers with ``{"error": <slug>, "detail": <message>}``.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("orderfx.errors")


class OrderServiceError(Exception):
    """Base class for failures surfaced to API callers."""

    slug = "order_service_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(OrderServiceError):
    slug = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class OrderNotFound(NotFoundError):
    slug = "order_not_found"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} could not be found.")


class RelatedEntityNotFound(NotFoundError):
    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} {entity_id} could not be found.")


class UnknownCurrency(OrderServiceError):
    slug = "unknown_currency"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Currency type for {code} could not be found.")


class UpstreamUnavailable(OrderServiceError):
    slug = "upstream_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class UpstreamTransportError(OrderServiceError):
    # Same status as UpstreamUnavailable; the slug keeps them apart in logs
    slug = "upstream_transport_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class NoChanges(OrderServiceError):
    slug = "no_changes"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"No changes detected for order {order_id}.")


def domain_error_handler(request: Request, exc: OrderServiceError):  # type: ignore
    if exc.status_code >= 500:
        logger.warning(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc,
            extra={"slug": exc.slug},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.slug, "detail": str(exc)},
    )


def not_found_handler(request: Request, exc):  # type: ignore
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError):
    # pydantic v2 puts the raw exception under "ctx" which json cannot encode
    out = []
    for err in exc.errors():
        err = dict(err)
        ctx = err.get("ctx")
        if ctx:
            err["ctx"] = {k: str(v) for k, v in ctx.items()}
        out.append(err)
    return out


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
