"""Centralized translation of errors into JSON problem documents."""

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from tables_service.core.errors import ServiceError


def problem_response(
    status_code: int,
    detail: Any = None,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    body: dict[str, Any] = {
        "status": status_code,
        "title": HTTPStatus(status_code).phrase,
    }
    if detail is not None:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _field_errors(exc)
    logger.bind(errors=errors).info("request.validation_error")
    return problem_response(400, "Request validation failed", errors=errors)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return problem_response(exc.status_code, exc.detail, headers=exc.headers)


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.bind(error_type=type(exc).__name__).info("request.service_error: {}", exc.detail)
    return problem_response(exc.status_code, exc.detail)


def register_problem_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ServiceError, service_exception_handler)
