"""Problem+json (RFC 7807) error responses for every failure the API reports.

Views and services raise :class:`APIError` subclasses (services do so through
``BaseService.translate_exceptions``); everything else is normalized by the
handlers registered in :func:`init_app`, so clients always receive the same
envelope::

    {"type": "about:blank", "title": "Unauthorized", "status": 401,
     "detail": "...", "instance": "/api/article", "code": "unauthorized",
     "request_id": "..."}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, ClassVar

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from tokenauth.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine codes for the statuses this API can produce.
_STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    415: "unsupported_media_type",
    422: "validation_error",
    500: "internal_server_error",
    503: "service_unavailable",
}


def _code_for(status: int) -> str:
    return _STATUS_CODES.get(status, "error")


def build_problem(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the problem document for the current request.

    :param status: HTTP status code.
    :param message: Client-safe summary, used as ``detail``.
    :param code: Machine code; derived from ``status`` when omitted.
    :param details: Optional structured details (validation messages).
    :returns: Problem+JSON dictionary carrying the request id.
    """
    status = int(status)
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code or _code_for(status),
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def problem_response(problem: dict[str, Any], *, exc_info: bool = False) -> tuple[Response, int]:
    """Log ``problem`` at a level matching its status and wrap it in a response."""
    status = int(problem["status"])
    if status >= 500:
        log.error(
            "request.failed code=%s status=%s request_id=%s",
            problem["code"],
            status,
            problem["request_id"],
            exc_info=exc_info,
        )
    else:
        log.warning(
            "request.rejected code=%s status=%s detail=%s request_id=%s",
            problem["code"],
            status,
            problem["detail"],
            problem["request_id"],
        )
    resp = jsonify(problem)
    resp.mimetype = PROBLEM_MIMETYPE
    if status == HTTPStatus.UNAUTHORIZED:
        resp.headers["WWW-Authenticate"] = "Bearer"
    return resp, status


class APIError(Exception):
    """
    Error that maps directly onto an HTTP problem response.

    Subclasses only pin ``status_code``, ``code`` and ``default_message``.

    Parameters
    ----------
    message : str, optional
        Client-facing description. Defaults to ``default_message``.
    status_code : int, optional
        Overrides the class status.
    code : str, optional
        Overrides the class machine code.
    details : dict[str, Any] | None, optional
        Structured payload included in the response body.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"
    default_message: ClassVar[str] = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = int(status_code)
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return build_problem(
            int(self.status_code), self.message, code=self.code, details=self.details
        )


class Unauthorized(APIError):
    """401: no principal, bad credentials or a rejected token."""

    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    default_message = "Authentication required"


class Forbidden(APIError):
    """403: authenticated, but the role does not grant access."""

    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden"


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Conflict(APIError):
    """Duplicate email on registration. Reported as 400, keeping its own code."""

    status_code = HTTPStatus.BAD_REQUEST
    code = "conflict"
    default_message = "Conflict"


def init_app(app: Flask) -> None:
    """
    Register the problem+json handlers on ``app``.

    Notes
    -----
    - 4xx are logged as warnings, 5xx as errors (with traceback when the
      failure is unexpected).
    - Internal details never reach the client.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(err.to_problem())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(build_problem(status, message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        problem = build_problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            details={"errors": err.messages},
        )
        return problem_response(problem)

    @app.errorhandler(OperationalError)
    @app.errorhandler(RedisError)
    def handle_backend_unavailable(err: Exception):
        # Database or Redis unreachable
        problem = build_problem(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")
        return problem_response(problem, exc_info=True)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        problem = build_problem(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
        return problem_response(problem, exc_info=True)
